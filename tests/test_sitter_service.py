"""
Sitter service tests.
SQL is checked by compiling statements with the PostgreSQL dialect.
Run with: pytest tests/test_sitter_service.py -v
"""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

import services.sitter_service as sitter_service
from models.sitter import SitterProfile
from schemas.sitter import PetType, SitterCreate, SitterSearchQuery, SortKey
from services.sitter_service import (
    DuplicateEmailError,
    SitterConstraintError,
    build_search_statement,
    create_sitter,
    get_reviews,
    get_sitter,
    get_sitter_image_url,
    list_sitters,
    search_sitters,
    update_sitter
)


SEATTLE = dict(latitude=47.6062, longitude=-122.3321)


def compile_sql(stmt):
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def where_clause(sql: str) -> str:
    return sql.split("WHERE", 1)[1].split("ORDER BY", 1)[0]


def order_clause(sql: str) -> str:
    return sql.split("ORDER BY", 1)[1]


# ==============================
# Search statement
# ==============================
class TestBuildSearchStatement:
    """The proximity query is delegated to PostGIS."""

    def test_radius_filter_uses_dwithin_in_meters(self):
        sql, params = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE, radius_km=15)))

        assert "ST_DWithin(" in where_clause(sql)
        assert 15000.0 in params.values()
        assert -122.3321 in params.values()
        assert 47.6062 in params.values()

    def test_distance_and_geojson_are_selected(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE)))

        assert "ST_Distance(" in sql
        assert "ST_AsGeoJSON(" in sql
        assert "AS distance_km" in sql
        assert "geography" in sql

    def test_only_active_sitters(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE)))

        assert "sitter_profiles.is_active IS true" in where_clause(sql)

    def test_default_sort_is_distance(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE)))

        assert order_clause(sql).strip().startswith("distance_km ASC")

    def test_sort_by_price(self):
        query = SitterSearchQuery(**SEATTLE, sort_by=SortKey.PRICE)
        sql, _ = compile_sql(build_search_statement(query))

        assert order_clause(sql).strip().startswith("sitter_profiles.hourly_rate ASC")

    def test_sort_by_rating(self):
        query = SitterSearchQuery(**SEATTLE, sort_by=SortKey.RATING)
        sql, _ = compile_sql(build_search_statement(query))

        assert order_clause(sql).strip().startswith("average_rating DESC NULLS LAST")

    @pytest.mark.parametrize("pet_type,column", [
        (PetType.DOG, "accepts_dogs"),
        (PetType.CAT, "accepts_cats"),
        (PetType.OTHER, "accepts_other_pets"),
    ])
    def test_pet_type_filter(self, pet_type, column):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE, pet_type=pet_type)))
        where = where_clause(sql)

        assert f"sitter_profiles.{column} IS true" in where
        for other in {"accepts_dogs", "accepts_cats", "accepts_other_pets"} - {column}:
            assert f"sitter_profiles.{other} IS true" not in where

    def test_all_pet_types_adds_no_species_filter(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE, pet_type=PetType.ALL)))

        assert "accepts_" not in where_clause(sql)

    @pytest.mark.parametrize("service,column", [
        ("Dog boarding", "accepts_dogs"),
        ("Cat sitting", "accepts_cats"),
    ])
    def test_service_filter(self, service, column):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE, service=service)))

        assert f"sitter_profiles.{column} IS true" in where_clause(sql)

    def test_unknown_service_adds_no_filter(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE, service="Bird care")))

        assert "accepts_" not in where_clause(sql)

    def test_rate_bounds(self):
        query = SitterSearchQuery(**SEATTLE, min_rate=20, max_rate=50)
        sql, params = compile_sql(build_search_statement(query))
        where = where_clause(sql)

        assert "sitter_profiles.hourly_rate >=" in where
        assert "sitter_profiles.hourly_rate <=" in where
        assert 20 in params.values()
        assert 50 in params.values()

    def test_reviews_are_aggregated_with_mock_fallback(self):
        sql, _ = compile_sql(build_search_statement(SitterSearchQuery(**SEATTLE)))

        assert "avg(reviews.rating)" in sql
        assert "LEFT OUTER JOIN" in sql
        assert "coalesce(review_stats.avg_rating, sitter_profiles.mock_rating)" in sql


# ==============================
# Result shaping
# ==============================
class TestSearchSitters:

    def test_rows_are_shaped_for_map_pins(self, fake_db, sitter_factory):
        sitter = sitter_factory()
        geojson = '{"type":"Point","coordinates":[-122.33,47.61]}'
        fake_db.execute.return_value.all.return_value = [(sitter, geojson, 1.23456, 4.87, 12)]

        results = search_sitters(fake_db, SitterSearchQuery(**SEATTLE))

        assert len(results) == 1
        result = results[0]
        assert result.name == "Sarah Johnson"
        assert result.location.lat == 47.61
        assert result.location.lng == -122.33
        assert result.distance_km == 1.23
        assert result.average_rating == 4.9
        assert result.review_count == 12
        assert result.hourly_rate == 45.0
        assert result.response_time == "< 1 hour"
        assert "🌟 Top rated" in result.generated_tags

    def test_empty_result(self, fake_db):
        fake_db.execute.return_value.all.return_value = []

        assert search_sitters(fake_db, SitterSearchQuery(**SEATTLE)) == []


# ==============================
# List all / reviews
# ==============================
class TestListSitters:

    def test_statement_is_active_only_ordered_by_id(self, fake_db):
        fake_db.execute.return_value.all.return_value = []

        list_sitters(fake_db)

        sql, _ = compile_sql(fake_db.execute.call_args[0][0])
        assert "ST_AsGeoJSON(" in sql
        assert "sitter_profiles.is_active IS true" in where_clause(sql)
        assert order_clause(sql).strip() == "sitter_profiles.id"

    def test_rows_are_shaped_with_geojson_location(self, fake_db, sitter_factory):
        fake_db.execute.return_value.all.return_value = [
            (sitter_factory(id=1), '{"type":"Point","coordinates":[-122.33,47.61]}'),
            (sitter_factory(id=2, first_name="Mike", last_name="Chen", hourly_rate="38.50"), None),
        ]

        results = list_sitters(fake_db)

        assert [s.id for s in results] == [1, 2]
        assert results[0].name == "Sarah Johnson"
        assert results[0].location.type == "Point"
        assert results[0].location.coordinates == [-122.33, 47.61]
        assert results[1].name == "Mike Chen"
        assert results[1].hourly_rate == 38.5
        assert results[1].location is None


class TestGetReviews:

    def test_statement_joins_owner_newest_first(self, fake_db):
        fake_db.execute.return_value.all.return_value = []

        get_reviews(fake_db, 7)

        sql, params = compile_sql(fake_db.execute.call_args[0][0])
        assert "LEFT OUTER JOIN owners ON reviews.owner_id = owners.id" in sql
        assert "owners.name AS owner_name" in sql
        assert "owners.profile_image_url AS owner_image" in sql
        assert "reviews.sitter_id =" in where_clause(sql)
        assert order_clause(sql).strip() == "reviews.created_at DESC"
        assert 7 in params.values()

    def test_rows_are_shaped(self, fake_db):
        created = datetime(2026, 3, 1, tzinfo=timezone.utc)
        fake_db.execute.return_value.all.return_value = [
            SimpleNamespace(_mapping={
                "id": 11, "rating": 5, "comment": "Great with our dog",
                "created_at": created, "owner_name": "Jamie", "owner_image": "/images/o1.png"
            }),
            SimpleNamespace(_mapping={
                "id": 10, "rating": 4, "comment": None,
                "created_at": None, "owner_name": None, "owner_image": None
            }),
        ]

        reviews = get_reviews(fake_db, 7)

        assert [r.id for r in reviews] == [11, 10]
        assert reviews[0].owner_name == "Jamie"
        assert reviews[0].owner_image == "/images/o1.png"
        assert reviews[0].created_at == created
        assert reviews[1].owner_name is None


# ==============================
# Detail / writes
# ==============================
def test_get_sitter_missing(fake_db):
    fake_db.execute.return_value.first.return_value = None

    assert get_sitter(fake_db, 99) is None


def test_get_sitter_includes_reviews(fake_db, monkeypatch, sitter_factory):
    sitter = sitter_factory(id=3)
    fake_db.execute.return_value.first.return_value = (
        sitter, '{"type":"Point","coordinates":[-122.33,47.61]}', None, 0
    )
    monkeypatch.setattr(sitter_service, "get_reviews", lambda db, sitter_id: [])

    detail = get_sitter(fake_db, 3)

    assert detail.id == 3
    assert detail.location.coordinates == [-122.33, 47.61]
    assert detail.average_rating is None
    assert detail.review_count == 0
    assert detail.reviews == []


def _create_payload(**overrides):
    values = dict(
        firstName="Test",
        lastName="Sitter",
        email="test@example.com",
        bio="Bio",
        hourlyRate=35,
        latitude=47.6062,
        longitude=-122.3321,
    )
    values.update(overrides)
    return SitterCreate(**values)


def test_create_sitter_stores_point(fake_db, monkeypatch):
    monkeypatch.setattr(sitter_service, "get_sitter", lambda db, sitter_id: "detail")

    result = create_sitter(fake_db, _create_payload())

    assert result == "detail"
    added = fake_db.add.call_args[0][0]
    assert isinstance(added, SitterProfile)
    assert added.first_name == "Test"
    assert added.location == "SRID=4326;POINT(-122.3321 47.6062)"
    assert added.is_active is True
    fake_db.commit.assert_called_once()


def test_create_sitter_duplicate_email(fake_db):
    fake_db.commit.side_effect = IntegrityError(
        "INSERT INTO sitter_profiles", {},
        Exception('duplicate key value violates unique constraint "ix_sitter_profiles_email"')
    )

    with pytest.raises(DuplicateEmailError):
        create_sitter(fake_db, _create_payload())

    fake_db.rollback.assert_called_once()


def test_update_sitter_check_constraint(fake_db, sitter_factory):
    fake_db.get.return_value = sitter_factory(id=5)
    fake_db.commit.side_effect = IntegrityError(
        "UPDATE sitter_profiles", {},
        Exception('new row violates check constraint "ck_sitter_hourly_rate_non_negative"')
    )

    with pytest.raises(SitterConstraintError):
        update_sitter(fake_db, 5, {"hourly_rate": -1})

    fake_db.rollback.assert_called_once()


def test_update_sitter_clears_nullable_field(fake_db, monkeypatch, sitter_factory):
    sitter = sitter_factory(id=5)
    fake_db.get.return_value = sitter
    monkeypatch.setattr(sitter_service, "get_sitter", lambda db, sitter_id: sitter_id)

    update_sitter(fake_db, 5, {"phone": None})

    assert sitter.phone is None
    fake_db.commit.assert_called_once()


def test_update_sitter_missing(fake_db):
    fake_db.get.return_value = None

    assert update_sitter(fake_db, 5, {"bio": "x"}) is None
    fake_db.commit.assert_not_called()


def test_update_sitter_sets_fields(fake_db, monkeypatch, sitter_factory):
    from schemas.geo import GeoPoint

    sitter = sitter_factory(id=5)
    fake_db.get.return_value = sitter
    monkeypatch.setattr(sitter_service, "get_sitter", lambda db, sitter_id: sitter_id)

    result = update_sitter(fake_db, 5, {"bio": "New bio", "location": GeoPoint(coordinates=[-97.7, 30.2])})

    assert result == 5
    assert sitter.bio == "New bio"
    assert sitter.location == "SRID=4326;POINT(-97.7 30.2)"
    fake_db.commit.assert_called_once()


def test_get_sitter_image_url(fake_db):
    fake_db.execute.return_value.scalar_one_or_none.return_value = "/images/s.png"

    assert get_sitter_image_url(fake_db, 1) == "/images/s.png"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
