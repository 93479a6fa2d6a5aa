"""
Sitter service.
Builds the PostGIS proximity search and shapes sitter rows for the API.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.owner import Owner
from models.review import Review
from models.sitter import SitterProfile
from schemas.sitter import (
    PetType,
    ReviewResponse,
    SitterCreate,
    SitterDetailResponse,
    SitterSearchQuery,
    SitterSearchResult,
    SitterSummary,
    SortKey
)
from services.geo import METERS_PER_KM, make_point, parse_point, point_wkt, to_lat_lng
from services.tag_service import generate_tags_from_sitter


logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when a sitter email is already registered."""

    def __init__(self, email: str):
        super().__init__(f"A sitter with email {email} already exists")
        self.email = email


class SitterConstraintError(Exception):
    """Raised when a sitter write violates any other table constraint."""


def _review_stats():
    """Per-sitter review aggregate, computed at read time."""
    return (
        select(
            Review.sitter_id.label("sitter_id"),
            func.avg(Review.rating).label("avg_rating"),
            func.count(Review.id).label("review_count")
        )
        .group_by(Review.sitter_id)
        .subquery("review_stats")
    )


def _rating_columns(stats) -> Tuple:
    """
    Average rating and review count, falling back to the seeded reputation
    for sitters without any reviews yet.
    """
    average_rating = func.coalesce(stats.c.avg_rating, SitterProfile.mock_rating).label("average_rating")
    review_count = func.coalesce(stats.c.review_count, SitterProfile.mock_review_count, 0).label("review_count")
    return average_rating, review_count


def _species_conditions(query: SitterSearchQuery) -> list:
    conditions = []

    if query.service:
        service = query.service.lower()
        if "dog" in service:
            conditions.append(SitterProfile.accepts_dogs.is_(True))
        elif "cat" in service:
            conditions.append(SitterProfile.accepts_cats.is_(True))

    if query.pet_type == PetType.DOG:
        conditions.append(SitterProfile.accepts_dogs.is_(True))
    elif query.pet_type == PetType.CAT:
        conditions.append(SitterProfile.accepts_cats.is_(True))
    elif query.pet_type == PetType.OTHER:
        conditions.append(SitterProfile.accepts_other_pets.is_(True))

    return conditions


def build_search_statement(query: SitterSearchQuery) -> Select:
    """
    Build the proximity search for active sitters around the query origin.

    Radius filtering uses ST_DWithin on the geography column (metres), and
    distance is ST_Distance reported in kilometres.
    """
    origin = make_point(query.longitude, query.latitude)
    stats = _review_stats()
    average_rating, review_count = _rating_columns(stats)
    distance_km = (func.ST_Distance(SitterProfile.location, origin) / METERS_PER_KM).label("distance_km")

    stmt = (
        select(
            SitterProfile,
            func.ST_AsGeoJSON(SitterProfile.location).label("location_geojson"),
            distance_km,
            average_rating,
            review_count
        )
        .outerjoin(stats, stats.c.sitter_id == SitterProfile.id)
        .where(func.ST_DWithin(SitterProfile.location, origin, query.radius_km * METERS_PER_KM))
        .where(SitterProfile.is_active.is_(True))
    )

    for condition in _species_conditions(query):
        stmt = stmt.where(condition)

    if query.min_rate is not None:
        stmt = stmt.where(SitterProfile.hourly_rate >= query.min_rate)
    if query.max_rate is not None:
        stmt = stmt.where(SitterProfile.hourly_rate <= query.max_rate)

    if query.sort_by == SortKey.PRICE:
        stmt = stmt.order_by(SitterProfile.hourly_rate.asc(), distance_km.asc())
    elif query.sort_by == SortKey.RATING:
        stmt = stmt.order_by(average_rating.desc().nulls_last(), distance_km.asc())
    else:
        stmt = stmt.order_by(distance_km.asc())

    return stmt


def _round(value, digits: int) -> Optional[float]:
    return round(float(value), digits) if value is not None else None


def _to_search_result(sitter, location_geojson, distance_km, average_rating, review_count) -> SitterSearchResult:
    average = _round(average_rating, 1)
    count = int(review_count or 0)
    return SitterSearchResult(
        id=sitter.id,
        name=f"{sitter.first_name} {sitter.last_name}".strip(),
        first_name=sitter.first_name,
        last_name=sitter.last_name,
        bio=sitter.bio,
        hourly_rate=float(sitter.hourly_rate),
        service_radius=sitter.service_radius,
        profile_picture=sitter.profile_picture,
        city=sitter.city,
        state=sitter.state,
        accepts_dogs=bool(sitter.accepts_dogs),
        accepts_cats=bool(sitter.accepts_cats),
        accepts_other_pets=bool(sitter.accepts_other_pets),
        location=to_lat_lng(parse_point(location_geojson)),
        distance_km=_round(distance_km, 2),
        average_rating=average,
        review_count=count,
        response_time=sitter.mock_response_time,
        repeat_client_percent=sitter.mock_repeat_client_percent,
        generated_tags=generate_tags_from_sitter(sitter, average, count)
    )


def search_sitters(db: Session, query: SitterSearchQuery) -> List[SitterSearchResult]:
    """
    Run the proximity search.

    Args:
        db: Database session
        query: Search parameters

    Returns:
        Sitters within the radius, ordered per query.sort_by
    """
    rows = db.execute(build_search_statement(query)).all()
    logger.info(
        "Sitter search at (%s, %s) within %s km returned %d rows",
        query.latitude, query.longitude, query.radius_km, len(rows)
    )
    return [_to_search_result(*row) for row in rows]


def list_sitters(db: Session) -> List[SitterSummary]:
    """Return every active sitter ordered by id."""
    stmt = (
        select(SitterProfile, func.ST_AsGeoJSON(SitterProfile.location).label("location_geojson"))
        .where(SitterProfile.is_active.is_(True))
        .order_by(SitterProfile.id)
    )
    results = []
    for sitter, location_geojson in db.execute(stmt).all():
        results.append(SitterSummary(
            id=sitter.id,
            name=f"{sitter.first_name} {sitter.last_name}".strip(),
            first_name=sitter.first_name,
            last_name=sitter.last_name,
            city=sitter.city,
            state=sitter.state,
            hourly_rate=float(sitter.hourly_rate),
            profile_picture=sitter.profile_picture,
            location=parse_point(location_geojson)
        ))
    return results


def get_reviews(db: Session, sitter_id: int) -> List[ReviewResponse]:
    """Reviews for a sitter, newest first, with the author's name and image."""
    stmt = (
        select(
            Review.id,
            Review.rating,
            Review.comment,
            Review.created_at,
            Owner.name.label("owner_name"),
            Owner.profile_image_url.label("owner_image")
        )
        .outerjoin(Owner, Review.owner_id == Owner.id)
        .where(Review.sitter_id == sitter_id)
        .order_by(Review.created_at.desc())
    )
    return [ReviewResponse(**row._mapping) for row in db.execute(stmt).all()]


def get_sitter(db: Session, sitter_id: int) -> Optional[SitterDetailResponse]:
    """
    Get a sitter profile with its review aggregate and reviews.

    Returns None if no sitter has the given id.
    """
    stats = _review_stats()
    average_rating, review_count = _rating_columns(stats)
    stmt = (
        select(
            SitterProfile,
            func.ST_AsGeoJSON(SitterProfile.location).label("location_geojson"),
            average_rating,
            review_count
        )
        .outerjoin(stats, stats.c.sitter_id == SitterProfile.id)
        .where(SitterProfile.id == sitter_id)
    )
    row = db.execute(stmt).first()
    if row is None:
        return None

    sitter, location_geojson, average, count = row
    average = _round(average, 1)
    count = int(count or 0)

    return SitterDetailResponse(
        id=sitter.id,
        name=f"{sitter.first_name} {sitter.last_name}".strip(),
        first_name=sitter.first_name,
        last_name=sitter.last_name,
        email=sitter.email,
        phone=sitter.phone,
        bio=sitter.bio,
        experience=sitter.experience,
        hourly_rate=float(sitter.hourly_rate),
        service_radius=sitter.service_radius,
        profile_picture=sitter.profile_picture,
        address=sitter.address,
        city=sitter.city,
        state=sitter.state,
        zip_code=sitter.zip_code,
        location=parse_point(location_geojson),
        accepts_dogs=bool(sitter.accepts_dogs),
        accepts_cats=bool(sitter.accepts_cats),
        accepts_other_pets=bool(sitter.accepts_other_pets),
        has_fenced_yard=bool(sitter.has_fenced_yard),
        has_other_pets=bool(sitter.has_other_pets),
        is_smoke_free=bool(sitter.is_smoke_free),
        is_active=bool(sitter.is_active),
        average_rating=average,
        review_count=count,
        response_time=sitter.mock_response_time,
        repeat_client_percent=sitter.mock_repeat_client_percent,
        generated_tags=generate_tags_from_sitter(sitter, average, count),
        reviews=get_reviews(db, sitter_id)
    )


def _commit(db: Session, email: Optional[str]) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if email is not None and "email" in str(e.orig).lower():
            raise DuplicateEmailError(email) from e
        logger.warning("Sitter write rejected by a constraint: %s", e.orig)
        raise SitterConstraintError("Sitter data violates a database constraint") from e


def create_sitter(db: Session, payload: SitterCreate) -> SitterDetailResponse:
    """
    Insert a new sitter profile.

    Raises:
        DuplicateEmailError: If the email is already registered
        SitterConstraintError: If another table constraint rejects the row
    """
    data = payload.model_dump(exclude={"latitude", "longitude", "location"})
    sitter = SitterProfile(**data, location=point_wkt(payload.location), is_active=True)
    db.add(sitter)
    _commit(db, payload.email)
    logger.info("Created sitter %s (%s)", sitter.id, sitter.email)
    return get_sitter(db, sitter.id)


def update_sitter(db: Session, sitter_id: int, update_data: dict) -> Optional[SitterDetailResponse]:
    """
    Apply a partial update to a sitter.

    Args:
        db: Database session
        sitter_id: Sitter to update
        update_data: Column values to set; "location" holds a GeoPoint

    Returns:
        Updated sitter, or None if the sitter does not exist

    Raises:
        DuplicateEmailError: If the new email is already registered
        SitterConstraintError: If another table constraint rejects the change
    """
    sitter = db.get(SitterProfile, sitter_id)
    if sitter is None:
        return None

    for field, value in update_data.items():
        if field == "location":
            value = point_wkt(value)
        setattr(sitter, field, value)

    _commit(db, update_data.get("email"))
    logger.info("Updated sitter %s fields: %s", sitter_id, sorted(update_data))
    return get_sitter(db, sitter_id)


def get_sitter_image_url(db: Session, sitter_id: int) -> Optional[str]:
    """Profile picture URL, or None when the sitter or picture is missing."""
    return db.execute(
        select(SitterProfile.profile_picture).where(SitterProfile.id == sitter_id)
    ).scalar_one_or_none()
