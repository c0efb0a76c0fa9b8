from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from faculty_portal.core.database import get_db
from faculty_portal.models.report import ReportStatus
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.schemas.report import MonitoringReport
from faculty_portal.services.report_service import ReportService

router = APIRouter()


@router.get("", response_model=List[MonitoringReport])
async def monitoring_data(
    status: Optional[ReportStatus] = Query(None, description="Only reports in this state"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Reports with rating count and average, filtered by the caller's role"""
    return await ReportService(db).monitoring(current_user, status=status)
