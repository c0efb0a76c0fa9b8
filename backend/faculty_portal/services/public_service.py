"""
Public Service - unauthenticated figures for the landing page
"""

from typing import Any, Dict, List
from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.models.academic import Faculty, Course, StudentClass
from faculty_portal.models.report import Report, ReportStatus
from faculty_portal.models.user import User, UserRole, STAFF_ROLES
from faculty_portal.services.report_service import report_detail_columns, with_report_joins

POSITION_TITLES = {
    UserRole.FMG: "Faculty Management",
    UserRole.PL: "Program Leader",
    UserRole.PRL: "Program Representative Lecturer",
    UserRole.LECTURER: "Lecturer",
}

# Hierarchy order, top first
HIERARCHY_ORDER = (UserRole.FMG, UserRole.PL, UserRole.PRL, UserRole.LECTURER)

LATEST_REPORTS_LIMIT = 10


class PublicService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, stmt) -> int:
        return int((await self.db.execute(stmt)).scalar() or 0)

    async def stats(self) -> Dict[str, int]:
        return {
            "totalFaculties": await self._count(select(func.count(Faculty.id))),
            "totalCourses": await self._count(select(func.count(Course.id))),
            "totalClasses": await self._count(select(func.count(StudentClass.id))),
            "totalReports": await self._count(
                select(func.count(Report.id)).where(Report.status == ReportStatus.SIGNED)
            ),
            "totalStaff": await self._count(
                select(func.count(User.id)).where(User.role.in_(STAFF_ROLES))
            ),
            "totalStudents": await self._count(
                select(func.count(User.id)).where(User.role == UserRole.STUDENT)
            ),
        }

    async def faculty_summaries(self) -> List[Dict[str, Any]]:
        course_count = (
            select(func.count(Course.id))
            .where(Course.faculty_id == Faculty.id)
            .scalar_subquery()
        )
        class_count = (
            select(func.count(StudentClass.id))
            .join(Course, StudentClass.course_id == Course.id)
            .where(Course.faculty_id == Faculty.id)
            .scalar_subquery()
        )
        staff_count = (
            select(func.count(User.id))
            .where(User.faculty_id == Faculty.id, User.role.in_(STAFF_ROLES))
            .scalar_subquery()
        )
        student_count = (
            select(func.count(User.id))
            .where(User.faculty_id == Faculty.id, User.role == UserRole.STUDENT)
            .scalar_subquery()
        )
        stmt = select(
            Faculty.id,
            Faculty.name,
            course_count.label("course_count"),
            class_count.label("class_count"),
            staff_count.label("staff_count"),
            student_count.label("student_count"),
        ).order_by(Faculty.name)

        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def staff_hierarchy(self) -> Dict[str, Dict[str, Any]]:
        """Staff grouped per faculty and per level, fmg first"""
        rank = case(
            *[(User.role == role, index) for index, role in enumerate(HIERARCHY_ORDER)],
            else_=len(HIERARCHY_ORDER),
        )
        stmt = (
            select(User.id, User.name, User.email, User.role, User.faculty_id, Faculty.name.label("faculty_name"))
            .outerjoin(Faculty, User.faculty_id == Faculty.id)
            .where(User.role.in_(STAFF_ROLES))
            .order_by(Faculty.name, rank, User.name)
        )

        hierarchy: Dict[str, Dict[str, Any]] = {}
        for row in (await self.db.execute(stmt)).mappings().all():
            bucket = hierarchy.setdefault(str(row["faculty_id"]), {
                "faculty_name": row["faculty_name"],
                "total_staff": 0,
                **{role.value: [] for role in HIERARCHY_ORDER},
            })
            bucket[row["role"].value].append({
                "id": row["id"],
                "name": row["name"],
                "email": row["email"],
                "position": POSITION_TITLES[row["role"]],
            })
            bucket["total_staff"] += 1
        return hierarchy

    async def staff_count(self) -> Dict[str, Dict[str, Any]]:
        stmt = (
            select(User.faculty_id, User.role, func.count(User.id).label("count"))
            .where(User.role.in_(STAFF_ROLES))
            .group_by(User.faculty_id, User.role)
            .order_by(User.faculty_id, User.role)
        )

        counts: Dict[str, Dict[str, Any]] = {}
        for row in (await self.db.execute(stmt)).mappings().all():
            bucket = counts.setdefault(str(row["faculty_id"]), {"total": 0, "breakdown": {}})
            bucket["breakdown"][row["role"].value] = int(row["count"])
            bucket["total"] += int(row["count"])
        return counts

    async def latest_signed_reports(self) -> List[Dict[str, Any]]:
        stmt = (
            with_report_joins(select(*report_detail_columns()))
            .where(Report.status == ReportStatus.SIGNED)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(LATEST_REPORTS_LIMIT)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
