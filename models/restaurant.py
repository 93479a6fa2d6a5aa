"""
SQLAlchemy model for Restaurant table.

Kept from the Restaurant Explorer variant of the application.
"""
from geoalchemy2 import Geography
from sqlalchemy import Column, String, Float, Integer

from core.database import Base


class Restaurant(Base):
    """Restaurant model representing the restaurants table."""

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rank = Column(Integer, nullable=True, index=True)
    name = Column(String(255), nullable=False)
    city = Column(String(100), nullable=True)
    address = Column(String(500), nullable=True)
    cuisine_type = Column(String(100), nullable=True)
    specialty = Column(String(255), nullable=True)
    yelp_rating = Column(Float, nullable=True, comment="Yelp rating (0.0 ~ 5.0)")
    price_range = Column(String(10), nullable=True, comment="$ ~ $$$$")
    image_url = Column(String(500), nullable=True)
    location = Column(Geography(geometry_type="POINT", srid=4326), nullable=False)
