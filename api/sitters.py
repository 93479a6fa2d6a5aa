"""
Sitter API endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.sitter import (
    ImageResponse,
    SitterCreate,
    SitterDetailResponse,
    SitterSummary,
    SitterUpdate
)
from services.sitter_service import (
    DuplicateEmailError,
    SitterConstraintError,
    create_sitter,
    get_sitter,
    get_sitter_image_url,
    list_sitters,
    update_sitter
)

router = APIRouter(prefix="/sitters", tags=["sitters"])


@router.get("", response_model=List[SitterSummary])
def get_all_sitters(db: Session = Depends(get_db)):
    """List every active sitter."""
    return list_sitters(db)


@router.get("/{sitter_id}", response_model=SitterDetailResponse)
def get_sitter_profile(sitter_id: int, db: Session = Depends(get_db)):
    """
    Get sitter profile by id.

    Includes the review aggregate, reviews and generated tags.
    """
    sitter = get_sitter(db, sitter_id)

    if not sitter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sitter with id {sitter_id} not found"
        )

    return sitter


@router.post("", response_model=SitterDetailResponse, status_code=status.HTTP_201_CREATED)
def create_sitter_profile(payload: SitterCreate, db: Session = Depends(get_db)):
    """
    Create a sitter profile.

    Accepts camelCase or snake_case fields. The location is given either as
    latitude/longitude or as a GeoJSON Point.
    """
    try:
        return create_sitter(db, payload)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SitterConstraintError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{sitter_id}", response_model=SitterDetailResponse)
@router.patch("/{sitter_id}", response_model=SitterDetailResponse)
def update_sitter_profile(
    sitter_id: int,
    payload: SitterUpdate,
    db: Session = Depends(get_db)
):
    """
    Partially update a sitter profile.

    Only the fields present in the body are written; null clears a nullable field.
    """
    update_data = payload.get_update_data()

    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update"
        )

    try:
        sitter = update_sitter(db, sitter_id, update_data)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SitterConstraintError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not sitter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sitter with id {sitter_id} not found"
        )

    return sitter


@router.get("/{sitter_id}/image", response_model=ImageResponse)
def get_sitter_image(sitter_id: int, db: Session = Depends(get_db)):
    """Return the sitter's profile picture URL."""
    url = get_sitter_image_url(db, sitter_id)

    if not url:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")

    return ImageResponse(url=url)
