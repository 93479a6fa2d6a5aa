"""
SQLAlchemy model for the sitter_profiles table.
"""
from geoalchemy2 import Geography
from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, Numeric, String, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class SitterProfile(Base):
    """Sitter model representing a service provider in the marketplace."""

    __tablename__ = "sitter_profiles"
    __table_args__ = (
        CheckConstraint("hourly_rate >= 0", name="ck_sitter_hourly_rate_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=True)
    profile_picture = Column(String(500), nullable=True)
    bio = Column(Text, nullable=False)
    experience = Column(Text, nullable=True)

    # Pricing and reach
    hourly_rate = Column(Numeric(8, 2), nullable=False)
    service_radius = Column(Integer, nullable=False, default=10, comment="Service radius in miles")

    # Address and geography (WGS84 lon/lat)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True, index=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    location = Column(Geography(geometry_type="POINT", srid=4326), nullable=False)

    # Species accepted
    accepts_dogs = Column(Boolean, nullable=False, default=True)
    accepts_cats = Column(Boolean, nullable=False, default=True)
    accepts_other_pets = Column(Boolean, nullable=False, default=False)

    # Home amenities
    has_fenced_yard = Column(Boolean, nullable=False, default=False)
    has_other_pets = Column(Boolean, nullable=False, default=False)
    is_smoke_free = Column(Boolean, nullable=False, default=True)

    # Seeded reputation, used until real reviews exist
    mock_rating = Column(Float, nullable=True)
    mock_review_count = Column(Integer, nullable=True)
    mock_response_time = Column(String(50), nullable=True)
    mock_repeat_client_percent = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    reviews = relationship("Review", back_populates="sitter", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<SitterProfile(id={self.id}, name='{self.full_name}', city='{self.city}')>"
