from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.rating import (
    RatingCreate,
    RatingResponse,
    RatingDetail,
    RatingEnvelope,
    RateableLecturer,
)
from faculty_portal.services.rating_service import RatingService

router = APIRouter()


@router.post("", response_model=RatingEnvelope, status_code=status.HTTP_201_CREATED)
async def submit_rating(
    rating_data: RatingCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    rating = await RatingService(db).submit(current_user, rating_data)
    return RatingEnvelope(
        message="Rating submitted successfully",
        rating=RatingResponse.model_validate(rating),
    )


@router.get("", response_model=List[RatingDetail])
async def list_ratings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RatingService(db).list_ratings(current_user)


@router.get("/lecturers", response_model=List[RateableLecturer])
async def rateable_lecturers(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Staff of the caller's faculty the caller can rate"""
    return await RatingService(db).rateable_lecturers(current_user)
