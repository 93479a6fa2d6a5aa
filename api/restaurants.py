"""
Restaurant API endpoints (Restaurant Explorer variant).
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from schemas.restaurant import NearbyRestaurantResponse, RestaurantResponse
from services.restaurant_service import find_nearby_restaurants, list_restaurants

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=List[RestaurantResponse])
def get_restaurants(db: Session = Depends(get_db)):
    """Get all restaurants ordered by rank."""
    return list_restaurants(db)


@router.get("/nearby", response_model=List[NearbyRestaurantResponse])
def get_nearby_restaurants(
    lon: float = Query(settings.DEFAULT_LONGITUDE, ge=-180, le=180),
    lat: float = Query(settings.DEFAULT_LATITUDE, ge=-90, le=90),
    km: float = Query(settings.DEFAULT_NEARBY_KM, gt=0),
    db: Session = Depends(get_db)
):
    """
    Get restaurants within `km` kilometres of (lon, lat), nearest first.

    Defaults to 5 km around downtown Seattle.
    """
    return find_nearby_restaurants(db, longitude=lon, latitude=lat, km=km)
