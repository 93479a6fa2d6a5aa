"""
Search API endpoints.
Handles sitter proximity search and place-name lookup.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from schemas.geo import LatLng
from schemas.location import LocationSearchResponse
from schemas.sitter import PetType, SitterSearchQuery, SitterSearchResponse, SortKey
from services.geocode_service import (
    GeocoderNotConfiguredError,
    GeocodingError,
    MapboxGeocoder,
    get_geocoder
)
from services.sitter_service import search_sitters

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/sitters", response_model=SitterSearchResponse)
def search_sitters_nearby(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    radius: float = Query(settings.DEFAULT_SEARCH_RADIUS_KM, gt=0, description="Radius in km"),
    service: Optional[str] = None,
    min_rate: Optional[float] = Query(None, alias="minRate", ge=0),
    max_rate: Optional[float] = Query(None, alias="maxRate", ge=0),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    pet_type: PetType = Query(PetType.ALL, alias="petType"),
    sort_by: SortKey = Query(SortKey.DISTANCE, alias="sortBy"),
    db: Session = Depends(get_db)
):
    """
    Search active sitters within a radius of a point.

    - `lng` and `lon` are interchangeable
    - `minPrice`/`maxPrice` take precedence over `minRate`/`maxRate`
    - `sortBy` is one of distance (default), price or rating
    """
    longitude = lng if lng is not None else lon

    if lat is None or longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Latitude and longitude are required"
        )

    query = SitterSearchQuery(
        latitude=lat,
        longitude=longitude,
        radius_km=radius,
        service=service,
        min_rate=min_price if min_price is not None else min_rate,
        max_rate=max_price if max_price is not None else max_rate,
        pet_type=pet_type,
        sort_by=sort_by
    )

    sitters = search_sitters(db, query)

    return SitterSearchResponse(
        sitters=sitters,
        total=len(sitters),
        search_location=LatLng(lat=lat, lng=longitude),
        radius_km=radius
    )


@router.get("/locations", response_model=LocationSearchResponse)
async def search_locations(
    q: Optional[str] = None,
    geocoder: MapboxGeocoder = Depends(get_geocoder)
):
    """Look up places by name for the search form's location box."""
    if not q or not q.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query parameter is required")

    try:
        locations = await geocoder.search_locations(q.strip())
    except GeocoderNotConfiguredError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Mapbox token not configured"
        )
    except GeocodingError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to search locations")

    return LocationSearchResponse(locations=locations)
