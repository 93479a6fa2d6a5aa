"""
Tag generation service for sitters.
Generates short display tags from species flags, home amenities and reputation.
"""
from typing import List, Optional
from enum import Enum

from core.config import settings
from models.sitter import SitterProfile


class TagLevel(Enum):
    """Reputation tiers based on average rating."""
    EXCEPTIONAL = "exceptional"  # >= 4.9
    EXCELLENT = "excellent"      # >= 4.7
    GOOD = "good"                # >= 4.3


RATING_TAGS = {
    TagLevel.EXCEPTIONAL: "🌟 Top rated",
    TagLevel.EXCELLENT: "⭐ Highly rated",
    TagLevel.GOOD: "Well reviewed",
}

SPECIES_TAGS = {
    "accepts_dogs": "🐶 Dogs welcome",
    "accepts_cats": "🐱 Cats welcome",
    "accepts_other_pets": "🐰 Small pets",
}

AMENITY_TAGS = {
    "has_fenced_yard": "🏡 Fenced yard",
    "is_smoke_free": "🚭 Smoke-free home",
}

# Response times the seed data and profile forms use for the quickest tier
FAST_RESPONSE_TIMES = {"< 30 min", "30 min", "< 1 hour", "1 hour"}

LOYAL_CLIENT_PERCENT = 85
MIN_REVIEWS_FOR_RATING_TAG = 5


def get_tag_level(average_rating: Optional[float], review_count: int) -> Optional[TagLevel]:
    """
    Determine the reputation tier for a sitter.

    Ratings backed by fewer than MIN_REVIEWS_FOR_RATING_TAG reviews get no tier.
    """
    if average_rating is None or review_count < MIN_REVIEWS_FOR_RATING_TAG:
        return None
    if average_rating >= 4.9:
        return TagLevel.EXCEPTIONAL
    elif average_rating >= 4.7:
        return TagLevel.EXCELLENT
    elif average_rating >= 4.3:
        return TagLevel.GOOD
    return None


def generate_reputation_tags(
    average_rating: Optional[float],
    review_count: int,
    response_time: Optional[str] = None,
    repeat_client_percent: Optional[int] = None
) -> List[str]:
    """Tags earned from reviews and booking history."""
    tags = []

    level = get_tag_level(average_rating, review_count)
    if level:
        tags.append(RATING_TAGS[level])

    if response_time and response_time.strip() in FAST_RESPONSE_TIMES:
        tags.append("⚡ Quick responder")

    if repeat_client_percent is not None and repeat_client_percent >= LOYAL_CLIENT_PERCENT:
        tags.append("🔁 Loyal clients")

    return tags


def generate_tags_from_sitter(
    sitter: SitterProfile,
    average_rating: Optional[float] = None,
    review_count: int = 0,
    max_tags: Optional[int] = None
) -> List[str]:
    """
    Generate display tags for a sitter.

    Reputation tags come first, then amenities, then accepted species.

    Args:
        sitter: SitterProfile instance (or any object with the same attributes)
        average_rating: Aggregated rating, falls back to the seeded rating
        review_count: Aggregated review count
        max_tags: Maximum number of tags, defaults to settings.MAX_SITTER_TAGS

    Returns:
        List of tags
    """
    if max_tags is None:
        max_tags = settings.MAX_SITTER_TAGS

    tags = generate_reputation_tags(
        average_rating,
        review_count,
        getattr(sitter, "mock_response_time", None),
        getattr(sitter, "mock_repeat_client_percent", None)
    )

    for field, tag in AMENITY_TAGS.items():
        if getattr(sitter, field, False):
            tags.append(tag)

    for field, tag in SPECIES_TAGS.items():
        if getattr(sitter, field, False):
            tags.append(tag)

    return tags[:max_tags]
