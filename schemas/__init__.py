"""Schemas module containing Pydantic request/response DTOs."""
from schemas.geo import GeoPoint, LatLng
from schemas.sitter import (
    PetType,
    SortKey,
    SitterSearchQuery,
    SitterCreate,
    SitterUpdate,
    SitterSummary,
    SitterSearchResult,
    SitterSearchResponse,
    SitterDetailResponse,
    ReviewResponse,
    ImageResponse
)
from schemas.restaurant import RestaurantResponse, NearbyRestaurantResponse
from schemas.location import LocationResult, LocationSearchResponse, MapboxConfigResponse

__all__ = [
    "GeoPoint",
    "LatLng",
    "PetType",
    "SortKey",
    "SitterSearchQuery",
    "SitterCreate",
    "SitterUpdate",
    "SitterSummary",
    "SitterSearchResult",
    "SitterSearchResponse",
    "SitterDetailResponse",
    "ReviewResponse",
    "ImageResponse",
    "RestaurantResponse",
    "NearbyRestaurantResponse",
    "LocationResult",
    "LocationSearchResponse",
    "MapboxConfigResponse"
]
