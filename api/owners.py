"""
Owner API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.sitter import ImageResponse
from services.owner_service import get_owner_image_url

router = APIRouter(prefix="/owners", tags=["owners"])


@router.get("/{owner_id}/image", response_model=ImageResponse)
def get_owner_image(owner_id: int, db: Session = Depends(get_db)):
    """Return the owner's profile image URL."""
    url = get_owner_image_url(db, owner_id)

    if not url:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")

    return ImageResponse(url=url)
