"""
Owner service.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.owner import Owner


def get_owner_image_url(db: Session, owner_id: int) -> Optional[str]:
    """Profile image URL, or None when the owner or image is missing."""
    return db.execute(
        select(Owner.profile_image_url).where(Owner.id == owner_id)
    ).scalar_one_or_none()
