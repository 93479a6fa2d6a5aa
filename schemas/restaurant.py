"""
Pydantic schemas for Restaurant-related responses.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

from schemas.geo import GeoPoint


class RestaurantResponse(BaseModel):
    """Response schema for GET /restaurants."""
    id: int
    rank: Optional[int] = None
    name: str
    city: Optional[str] = None
    address: Optional[str] = None
    cuisine_type: Optional[str] = None
    specialty: Optional[str] = None
    yelp_rating: Optional[float] = None
    price_range: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[GeoPoint] = None

    model_config = ConfigDict(from_attributes=True)


class NearbyRestaurantResponse(RestaurantResponse):
    """Response schema for GET /restaurants/nearby."""
    distance_km: float
