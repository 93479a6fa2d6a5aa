"""
Pydantic schemas for geocoding results.
"""
from pydantic import BaseModel
from typing import List, Optional


class LocationResult(BaseModel):
    """A single geocoded place, reshaped from a Mapbox feature."""
    id: str
    name: str
    coordinates: List[float]  # [longitude, latitude]
    type: Optional[str] = None
    bbox: Optional[List[float]] = None


class LocationSearchResponse(BaseModel):
    """Response schema for GET /search/locations."""
    locations: List[LocationResult] = []


class MapboxConfigResponse(BaseModel):
    """Response schema for GET /config/mapbox."""
    token: str
