"""
SQLAlchemy model for the reviews table.
"""
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class Review(Base):
    """Owner review of a sitter. Averaged per sitter at read time."""

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sitter_id = Column(Integer, ForeignKey("sitter_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("owners.id", ondelete="SET NULL"), nullable=True, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    sitter = relationship("SitterProfile", back_populates="reviews")
    owner = relationship("Owner", back_populates="reviews")
