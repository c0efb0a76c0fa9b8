from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional

from faculty_portal.core.database import get_db
from faculty_portal.models.user import User
from faculty_portal.modules.auth.dependencies import get_current_user
from faculty_portal.services.export_service import ExportService, XLSX_MEDIA_TYPE, export_filename

router = APIRouter()


@router.get("/user-data")
async def export_user_data(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    data_type: str = Query("all", description="reports, complaints, ratings, activities or all"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Download the caller's data as an Excel workbook"""
    content = await ExportService(db).export_user_data(
        current_user,
        data_type=data_type,
        start_date=start_date,
        end_date=end_date,
    )
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={export_filename(current_user.id)}"},
    )
