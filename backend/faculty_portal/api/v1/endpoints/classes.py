from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user, get_current_pl
from faculty_portal.schemas.academic import ClassCreate, ClassResponse, ClassCreatedResponse
from faculty_portal.services.directory_service import DirectoryService

router = APIRouter()


@router.get("", response_model=List[ClassResponse])
async def list_faculty_classes(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Classes of the courses offered by the caller's faculty"""
    return await DirectoryService(db).list_classes(faculty_id=current_user.faculty_id)


@router.post("", response_model=ClassCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    class_data: ClassCreate,
    current_user: User = Depends(get_current_pl),
    db: AsyncSession = Depends(get_db)
):
    created = await DirectoryService(db).create_class(current_user, class_data)
    return ClassCreatedResponse(
        message="Class created successfully",
        student_class=ClassResponse(**created),
    )
