"""
Mapbox API endpoints: client token handout and raw geocoding proxy.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from core.config import settings
from schemas.location import MapboxConfigResponse
from services.geocode_service import (
    GeocoderNotConfiguredError,
    GeocodingError,
    MapboxGeocoder,
    get_geocoder
)

router = APIRouter(tags=["mapbox"])


@router.get("/config/mapbox", response_model=MapboxConfigResponse)
def get_mapbox_config():
    """Provide the Mapbox token to the client map."""
    if not settings.has_mapbox_token():
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Mapbox configuration is missing"
        )
    return MapboxConfigResponse(token=settings.MAPBOX_TOKEN)


@router.get("/mapbox/geocode")
async def geocode(
    q: Optional[str] = None,
    geocoder: MapboxGeocoder = Depends(get_geocoder)
):
    """
    Proxy a forward-geocoding query to Mapbox.

    Returns the raw Mapbox FeatureCollection.
    """
    if not q or not q.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query parameter is required")

    try:
        return await geocoder.geocode(q.strip())
    except GeocoderNotConfiguredError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Mapbox token not configured"
        )
    except GeocodingError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to geocode location")
