from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.complaint import (
    ComplaintCreate,
    ComplaintRespond,
    ComplaintResponse,
    ComplaintDetail,
    ComplaintEnvelope,
)
from faculty_portal.services.complaint_service import ComplaintService

router = APIRouter()


@router.post("", response_model=ComplaintEnvelope, status_code=status.HTTP_201_CREATED)
async def file_complaint(
    complaint_data: ComplaintCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    complaint = await ComplaintService(db).file_complaint(current_user, complaint_data)
    return ComplaintEnvelope(
        message="Complaint submitted successfully",
        complaint=ComplaintResponse.model_validate(complaint),
    )


@router.get("", response_model=List[ComplaintDetail])
async def list_complaints(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Complaints visible to the caller's role, excluding ones filed against them"""
    return await ComplaintService(db).list_visible(current_user)


@router.get("/for-response", response_model=List[ComplaintDetail])
async def complaints_for_response(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Pending complaints routed to the caller's role or filed against the caller"""
    return await ComplaintService(db).list_for_response(current_user)


@router.post("/respond", response_model=ComplaintEnvelope)
async def respond_to_complaint(
    response_data: ComplaintRespond,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    complaint = await ComplaintService(db).respond(current_user, response_data)
    return ComplaintEnvelope(
        message="Response submitted successfully",
        complaint=ComplaintResponse.model_validate(complaint),
    )
