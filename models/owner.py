"""
SQLAlchemy model for the owners table.
"""
from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class Owner(Base):
    """Pet owner who books sitters and writes reviews."""

    __tablename__ = "owners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    profile_image_url = Column(String(500), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    reviews = relationship("Review", back_populates="owner")
