"""
Pydantic schemas for geographic values.
"""
from typing import List, Literal

from pydantic import BaseModel, field_validator


class GeoPoint(BaseModel):
    """GeoJSON Point. Coordinates are ordered [longitude, latitude]."""
    type: Literal["Point"] = "Point"
    coordinates: List[float]

    @field_validator("coordinates")
    @classmethod
    def check_coordinates(cls, value: List[float]) -> List[float]:
        if len(value) != 2:
            raise ValueError("Point coordinates must be [longitude, latitude]")
        longitude, latitude = value
        if not -180 <= longitude <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= latitude <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return value

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class LatLng(BaseModel):
    """Plain latitude/longitude pair used for map pins."""
    lat: float
    lng: float
