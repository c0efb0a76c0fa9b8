"""
Choice lists for forms. Faculties, courses and classes are public because
the registration page needs them before anyone has a token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User, UserRole
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.academic import (
    FacultyResponse,
    CourseResponse,
    ClassResponse,
    StaffMember,
    ProfileResponse,
)
from faculty_portal.services.directory_service import DirectoryService
from faculty_portal.services.profile_service import ProfileService

router = APIRouter()


@router.get("/faculties", response_model=List[FacultyResponse])
async def list_faculties(db: AsyncSession = Depends(get_db)):
    return await DirectoryService(db).list_faculties()


@router.get("/courses", response_model=List[CourseResponse])
async def list_courses(db: AsyncSession = Depends(get_db)):
    return await DirectoryService(db).list_courses()


@router.get("/classes", response_model=List[ClassResponse])
async def list_classes(db: AsyncSession = Depends(get_db)):
    return await DirectoryService(db).list_classes()


@router.get("/classes/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await DirectoryService(db).get_class(class_id)


@router.get("/users/{role}", response_model=List[StaffMember])
async def users_by_role(
    role: UserRole,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Users of a role within the caller's faculty"""
    return await DirectoryService(db).users_by_role(current_user, role)


@router.get("/user/profile", response_model=ProfileResponse)
async def current_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService(db).get_profile(current_user.id)
