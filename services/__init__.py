"""Services module containing business logic."""
from services.tag_service import generate_tags_from_sitter
from services.sitter_service import (
    search_sitters,
    list_sitters,
    get_sitter,
    create_sitter,
    update_sitter,
    get_sitter_image_url,
    DuplicateEmailError,
    SitterConstraintError
)
from services.restaurant_service import list_restaurants, find_nearby_restaurants
from services.owner_service import get_owner_image_url
from services.geocode_service import (
    MapboxGeocoder,
    GeocodingError,
    GeocoderNotConfiguredError,
    get_geocoder
)

__all__ = [
    "generate_tags_from_sitter",
    "search_sitters",
    "list_sitters",
    "get_sitter",
    "create_sitter",
    "update_sitter",
    "get_sitter_image_url",
    "DuplicateEmailError",
    "SitterConstraintError",
    "list_restaurants",
    "find_nearby_restaurants",
    "get_owner_image_url",
    "MapboxGeocoder",
    "GeocodingError",
    "GeocoderNotConfiguredError",
    "get_geocoder"
]
