from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.report import (
    ReportCreate,
    ReportSign,
    ReportResponse,
    ReportDetail,
    ReportEnvelope,
)
from faculty_portal.services.report_service import ReportService

router = APIRouter()


@router.post("", response_model=ReportEnvelope, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Teaching staff file a lecture report for one of their classes"""
    report = await ReportService(db).create_report(current_user, report_data)
    return ReportEnvelope(
        message="Report created successfully",
        report=ReportResponse.model_validate(report),
    )


@router.get("", response_model=List[ReportDetail])
async def list_reports(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ReportService(db).list_reports(current_user)


@router.post("/sign", response_model=ReportEnvelope)
async def sign_report(
    sign_data: ReportSign,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Class representative confirms a pending report"""
    report = await ReportService(db).sign_report(current_user, sign_data)
    return ReportEnvelope(
        message="Report signed successfully",
        report=ReportResponse.model_validate(report),
    )
