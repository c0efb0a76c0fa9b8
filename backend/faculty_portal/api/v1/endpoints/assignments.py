from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.assignment import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentDetail,
    AssignmentEnvelope,
)
from faculty_portal.services.assignment_service import AssignmentService

router = APIRouter()


@router.post("", response_model=AssignmentEnvelope, status_code=status.HTTP_201_CREATED)
async def assign_course(
    assignment_data: AssignmentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Program Leader assigns a lecturer to a course and class"""
    assignment = await AssignmentService(db).assign(current_user, assignment_data)
    return AssignmentEnvelope(
        message="Course assigned successfully",
        assignment=AssignmentResponse.model_validate(assignment),
    )


@router.get("", response_model=List[AssignmentDetail])
async def list_assignments(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await AssignmentService(db).list_for_faculty(current_user)
