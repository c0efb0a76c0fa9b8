"""
Unauthenticated endpoints behind the landing page
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List

from faculty_portal.core.database import get_db
from faculty_portal.schemas.public import PortalStats, FacultySummary, FacultyHierarchy, FacultyStaffCount
from faculty_portal.schemas.report import PublicReport
from faculty_portal.services.public_service import PublicService

router = APIRouter()


@router.get("/stats", response_model=PortalStats)
async def portal_stats(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).stats()


@router.get("/faculties", response_model=List[FacultySummary])
async def faculty_summaries(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).faculty_summaries()


@router.get("/staff-hierarchy", response_model=Dict[str, FacultyHierarchy])
async def staff_hierarchy(db: AsyncSession = Depends(get_db)):
    """Staff per faculty, keyed by faculty id, top of the hierarchy first"""
    return await PublicService(db).staff_hierarchy()


@router.get("/staff-count", response_model=Dict[str, FacultyStaffCount])
async def staff_count(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).staff_count()


@router.get("/reports", response_model=List[PublicReport])
async def latest_reports(db: AsyncSession = Depends(get_db)):
    """The ten most recent signed reports"""
    return await PublicService(db).latest_signed_reports()
