"""
Geography helpers shared by the proximity search services.

Distances are always computed by PostGIS on the geography type; these helpers
only build the SQL expressions and reshape ST_AsGeoJSON output.
"""
import json
from typing import Optional, Union

from geoalchemy2 import Geography
from sqlalchemy import cast, func

from schemas.geo import GeoPoint, LatLng


SRID_WGS84 = 4326
METERS_PER_KM = 1000


def make_point(longitude: float, latitude: float):
    """SQL expression for an SRID 4326 geography point."""
    return cast(
        func.ST_SetSRID(func.ST_MakePoint(longitude, latitude), SRID_WGS84),
        Geography(geometry_type=None),
    )


def point_wkt(point: GeoPoint) -> str:
    """EWKT for assigning a point to a geography column."""
    return f"SRID={SRID_WGS84};POINT({point.longitude} {point.latitude})"


def parse_point(geojson: Union[str, dict, None]) -> Optional[GeoPoint]:
    """Parse ST_AsGeoJSON output into a GeoPoint. None passes through."""
    if geojson is None:
        return None
    data = json.loads(geojson) if isinstance(geojson, str) else geojson
    return GeoPoint(type=data.get("type", "Point"), coordinates=data["coordinates"])


def to_lat_lng(point: Optional[GeoPoint]) -> Optional[LatLng]:
    if point is None:
        return None
    return LatLng(lat=point.latitude, lng=point.longitude)
