"""
Pydantic schemas for Sitter-related requests and responses.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from schemas.geo import GeoPoint, LatLng


class PetType(str, Enum):
    ALL = "all"
    DOG = "dog"
    CAT = "cat"
    OTHER = "other"


class SortKey(str, Enum):
    DISTANCE = "distance"
    PRICE = "price"
    RATING = "rating"


class SitterSearchQuery(BaseModel):
    """Proximity search parameters, built once per request."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius_km: float = Field(default=10.0, gt=0)
    service: Optional[str] = None
    min_rate: Optional[float] = Field(default=None, ge=0)
    max_rate: Optional[float] = Field(default=None, ge=0)
    pet_type: PetType = PetType.ALL
    sort_by: SortKey = SortKey.DISTANCE


class _CamelInput(BaseModel):
    """Accepts both camelCase and snake_case keys from clients."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def _location_from_coordinates(self) -> Optional[GeoPoint]:
        """
        Resolve latitude/longitude and GeoJSON location into one point.

        Returns None when neither form was given.
        """
        has_lat, has_lng = self.latitude is not None, self.longitude is not None
        if has_lat != has_lng:
            raise ValueError("latitude and longitude must be given together")
        if not has_lat:
            return self.location

        point = GeoPoint(coordinates=[self.longitude, self.latitude])
        if self.location is not None and self.location.coordinates != point.coordinates:
            raise ValueError("latitude/longitude do not match the GeoJSON location")
        return point


class SitterCreate(_CamelInput):
    """Request schema for POST /sitters."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    bio: str = Field(min_length=1)
    experience: Optional[str] = None
    hourly_rate: float = Field(ge=0)
    service_radius: int = Field(default=10, gt=0)
    profile_picture: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location: Optional[GeoPoint] = None
    accepts_dogs: bool = True
    accepts_cats: bool = True
    accepts_other_pets: bool = False
    has_fenced_yard: bool = False
    has_other_pets: bool = False
    is_smoke_free: bool = True

    @model_validator(mode="after")
    def resolve_location(self):
        location = self._location_from_coordinates()
        if location is None:
            raise ValueError("latitude and longitude (or a GeoJSON location) are required")
        self.location = location
        return self


# NOT NULL columns; an update may change them but never clear them
_REQUIRED_COLUMNS = (
    "first_name", "last_name", "email", "bio", "hourly_rate", "service_radius",
    "accepts_dogs", "accepts_cats", "accepts_other_pets",
    "has_fenced_yard", "has_other_pets", "is_smoke_free", "is_active"
)


class SitterUpdate(_CamelInput):
    """Request schema for PUT/PATCH /sitters/{sitter_id}. All fields optional."""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    service_radius: Optional[int] = Field(default=None, gt=0)
    profile_picture: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location: Optional[GeoPoint] = None
    accepts_dogs: Optional[bool] = None
    accepts_cats: Optional[bool] = None
    accepts_other_pets: Optional[bool] = None
    has_fenced_yard: Optional[bool] = None
    has_other_pets: Optional[bool] = None
    is_smoke_free: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator(*_REQUIRED_COLUMNS, "latitude", "longitude", "location")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @model_validator(mode="after")
    def resolve_location(self):
        self.location = self._location_from_coordinates()
        return self

    def get_update_data(self) -> dict:
        """
        Return the column fields the client sent.

        An explicit null is kept so nullable columns can be cleared.
        """
        data = self.model_dump(exclude_unset=True, exclude={"latitude", "longitude", "location"})
        if self.location is not None:
            data["location"] = self.location
        return data


class SitterSummary(BaseModel):
    """Sitter schema for list-all responses."""
    id: int
    name: str
    first_name: str
    last_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    hourly_rate: float
    profile_picture: Optional[str] = None
    location: Optional[GeoPoint] = None

    model_config = ConfigDict(from_attributes=True)


class SitterSearchResult(BaseModel):
    """Sitter schema for proximity search results."""
    id: int
    name: str
    first_name: str
    last_name: str
    bio: Optional[str] = None
    hourly_rate: float
    service_radius: Optional[int] = None
    profile_picture: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    accepts_dogs: bool
    accepts_cats: bool
    accepts_other_pets: bool
    location: Optional[LatLng] = None
    distance_km: float
    average_rating: Optional[float] = None
    review_count: int = 0
    response_time: Optional[str] = None
    repeat_client_percent: Optional[int] = None
    generated_tags: List[str] = []


class SitterSearchResponse(BaseModel):
    """Response schema for GET /search/sitters."""
    sitters: List[SitterSearchResult] = []
    total: int = 0
    search_location: LatLng
    radius_km: float


class ReviewResponse(BaseModel):
    """Review as shown on a sitter profile."""
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    owner_name: Optional[str] = None
    owner_image: Optional[str] = None


class SitterDetailResponse(BaseModel):
    """Response schema for GET /sitters/{sitter_id} and write endpoints."""
    id: int
    name: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    bio: str
    experience: Optional[str] = None
    hourly_rate: float
    service_radius: int
    profile_picture: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    location: Optional[GeoPoint] = None
    accepts_dogs: bool
    accepts_cats: bool
    accepts_other_pets: bool
    has_fenced_yard: bool
    has_other_pets: bool
    is_smoke_free: bool
    is_active: bool
    average_rating: Optional[float] = None
    review_count: int = 0
    response_time: Optional[str] = None
    repeat_client_percent: Optional[int] = None
    generated_tags: List[str] = []
    reviews: List[ReviewResponse] = []


class ImageResponse(BaseModel):
    """Response schema for profile image lookups."""
    url: str
