"""
Restaurant service for the Restaurant Explorer variant.
"""
import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.restaurant import Restaurant
from schemas.restaurant import NearbyRestaurantResponse, RestaurantResponse
from services.geo import METERS_PER_KM, make_point, parse_point


logger = logging.getLogger(__name__)


def _base_fields(restaurant: Restaurant, location_geojson) -> dict:
    return {
        "id": restaurant.id,
        "rank": restaurant.rank,
        "name": restaurant.name,
        "city": restaurant.city,
        "address": restaurant.address,
        "cuisine_type": restaurant.cuisine_type,
        "specialty": restaurant.specialty,
        "yelp_rating": restaurant.yelp_rating,
        "price_range": restaurant.price_range,
        "image_url": restaurant.image_url,
        "location": parse_point(location_geojson)
    }


def list_restaurants(db: Session) -> List[RestaurantResponse]:
    """Return all restaurants ordered by rank."""
    stmt = (
        select(Restaurant, func.ST_AsGeoJSON(Restaurant.location).label("location_geojson"))
        .order_by(Restaurant.rank.asc().nulls_last(), Restaurant.id)
    )
    return [
        RestaurantResponse(**_base_fields(restaurant, location_geojson))
        for restaurant, location_geojson in db.execute(stmt).all()
    ]


def build_nearby_statement(longitude: float, latitude: float, km: float):
    origin = make_point(longitude, latitude)
    distance_km = (func.ST_Distance(Restaurant.location, origin) / METERS_PER_KM).label("distance_km")
    return (
        select(
            Restaurant,
            func.ST_AsGeoJSON(Restaurant.location).label("location_geojson"),
            distance_km
        )
        .where(func.ST_DWithin(Restaurant.location, origin, km * METERS_PER_KM))
        .order_by(distance_km.asc())
    )


def find_nearby_restaurants(
    db: Session,
    longitude: float,
    latitude: float,
    km: float
) -> List[NearbyRestaurantResponse]:
    """
    Find restaurants within km kilometres of a point, nearest first.
    """
    rows = db.execute(build_nearby_statement(longitude, latitude, km)).all()
    logger.info("Nearby restaurant search at (%s, %s) within %s km returned %d rows",
                latitude, longitude, km, len(rows))
    return [
        NearbyRestaurantResponse(
            **_base_fields(restaurant, location_geojson),
            distance_km=round(float(distance_km), 2)
        )
        for restaurant, location_geojson, distance_km in rows
    ]
