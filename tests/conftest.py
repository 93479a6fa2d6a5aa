"""
Shared fixtures. No live database or network access is needed: the session
dependency is replaced with a MagicMock and services are patched per test.
"""
import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from core.database import get_db
from main import app


@pytest.fixture
def fake_db():
    return MagicMock()


@pytest.fixture
def client(fake_db):
    def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_sitter(**overrides):
    """Plain object with the SitterProfile attributes used by the services."""
    values = dict(
        id=1,
        first_name="Sarah",
        last_name="Johnson",
        email="sarah@example.com",
        phone="206-555-0101",
        bio="Experienced pet sitter with 5+ years caring for dogs and cats.",
        experience="Former vet tech.",
        hourly_rate=45,
        service_radius=10,
        profile_picture="/images/sarah.jpg",
        address="123 Main St",
        city="Seattle",
        state="WA",
        zip_code="98101",
        accepts_dogs=True,
        accepts_cats=True,
        accepts_other_pets=False,
        has_fenced_yard=True,
        has_other_pets=False,
        is_smoke_free=True,
        is_active=True,
        mock_rating=4.8,
        mock_review_count=127,
        mock_response_time="< 1 hour",
        mock_repeat_client_percent=90,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def sitter_factory():
    return make_sitter
