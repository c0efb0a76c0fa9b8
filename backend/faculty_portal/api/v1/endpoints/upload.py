from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.academic import ProfileImageResponse, MyProfileImageResponse
from faculty_portal.services.profile_service import ProfileService

router = APIRouter()


@router.post("/profile-image", response_model=ProfileImageResponse)
async def upload_profile_image(
    profile_image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Multipart upload, field name profile_image; images up to 5MB"""
    image_path = await ProfileService(db).save_profile_image(current_user, profile_image)
    return ProfileImageResponse(message="Profile image uploaded successfully", imagePath=image_path)


@router.get("/my-profile-image", response_model=MyProfileImageResponse)
async def my_profile_image(current_user: User = Depends(get_current_user)):
    return MyProfileImageResponse(profile_image=current_user.profile_image)
