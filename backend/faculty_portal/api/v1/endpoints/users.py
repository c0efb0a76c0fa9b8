from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.academic import (
    ProfileResponse,
    ProfileUpdate,
    ProfileSummary,
    ProfileUpdateResponse,
)
from faculty_portal.services.profile_service import ProfileService

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService(db).get_profile(current_user.id)


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user = await ProfileService(db).update_profile(current_user, profile_data)
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=ProfileSummary.model_validate(user),
    )
