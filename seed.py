#!/usr/bin/env python3
"""
Seed the sitter_profiles table from a JSON file of sitter records.

Usage: python seed.py [path/to/sitters.json] [--random-seed N]

Prefers seed-data/sitters-with-images.json when present, falling back to
seed-data/sitters.json.
"""
import argparse
import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.orm import Session

from core.database import SessionLocal
from models.sitter import SitterProfile
from services.geo import point_wkt
from schemas.geo import GeoPoint


logger = logging.getLogger(__name__)

SEED_DIR = Path(__file__).parent / "seed-data"
STREETS = ["Maple St", "Oak Ave", "Pine Dr", "Cedar Ln", "Elm Way"]
DEFAULT_PICTURE = "/images/placeholder-sitter.jpg"


def default_seed_path() -> Path:
    with_images = SEED_DIR / "sitters-with-images.json"
    return with_images if with_images.exists() else SEED_DIR / "sitters.json"


def split_name(name: str) -> Tuple[str, str]:
    """Split "First Middle Last" into ("First", "Middle Last")."""
    parts = name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def zip_code_for(city: Optional[str], rng: random.Random) -> str:
    prefix = "9810" if city == "Seattle" else "7870"
    return f"{prefix}{rng.randint(0, 9)}"


def build_sitter(record: dict, rng: random.Random) -> SitterProfile:
    """
    Convert one seed record into a SitterProfile.

    Home features drive the amenity flags; address, zip code and missing
    reputation numbers are generated from rng.
    """
    first_name, last_name = split_name(record["name"])
    features = record.get("homeFeatures") or []

    return SitterProfile(
        first_name=first_name,
        last_name=last_name,
        email=record["email"],
        phone=record.get("phone"),
        profile_picture=record.get("profilePicture") or DEFAULT_PICTURE,
        bio=record["bio"],
        experience=record.get("experience"),
        service_radius=record.get("serviceRadius") or 10,
        hourly_rate=record["hourlyRate"],
        mock_rating=record.get("rating") or 4.5,
        mock_review_count=record.get("reviewCount") or rng.randint(10, 59),
        mock_response_time=record.get("responseTime") or "1 hour",
        mock_repeat_client_percent=record.get("repeatClientPercent") or rng.randint(70, 99),
        address=f"{rng.randint(100, 9099)} {rng.choice(STREETS)}",
        city=record.get("city"),
        state=record.get("state"),
        zip_code=zip_code_for(record.get("city"), rng),
        location=point_wkt(GeoPoint(coordinates=[record["lng"], record["lat"]])),
        accepts_dogs=record.get("acceptsDogs", True),
        accepts_cats=record.get("acceptsCats", True),
        accepts_other_pets=record.get("acceptsOtherPets", rng.random() > 0.5),
        has_fenced_yard="Fenced Yard" in features,
        has_other_pets="Other Pets" in features,
        is_smoke_free="Smoking" not in features,
        is_active=True
    )


def load_seed_file(path: Path) -> List[dict]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def seed_sitters(db: Session, records: List[dict], rng: random.Random) -> int:
    """Replace all sitter profiles with the given records. Returns the count."""
    logger.info("Clearing existing sitter profiles...")
    db.execute(delete(SitterProfile))

    for record in records:
        sitter = build_sitter(record, rng)
        db.add(sitter)
        logger.info("Inserted sitter: %s (%s)", sitter.full_name, sitter.city)

    db.commit()
    return len(records)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sitter profiles")
    parser.add_argument("path", nargs="?", type=Path, default=None)
    parser.add_argument("--random-seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    path = args.path or default_seed_path()
    records = load_seed_file(path)
    rng = random.Random(args.random_seed)

    with SessionLocal() as db:
        try:
            count = seed_sitters(db, records, rng)
        except Exception:
            db.rollback()
            logger.exception("Seeding failed")
            raise

    cities = {}
    for record in records:
        cities[record.get("city")] = cities.get(record.get("city"), 0) + 1
    logger.info("Database seeding completed: %d sitters %s", count, cities)


if __name__ == "__main__":
    main()
