"""
Report Service - lecture reports and their signing workflow.

A report is created by teaching staff as pending, signed once by a class
representative of the same class, and later marked reviewed outside this
service. Status never moves backwards.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from faculty_portal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    ReportNotFoundError,
    ValidationError,
)
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import Faculty, Course, StudentClass
from faculty_portal.models.rating import Rating
from faculty_portal.models.report import Report, ReportStatus
from faculty_portal.models.user import User, UserRole
from faculty_portal.schemas.report import ReportCreate, ReportSign
from faculty_portal.services.directory_service import DirectoryService


def report_detail_columns():
    """Report columns plus the names every report listing shows"""
    return (
        *Report.__table__.columns,
        StudentClass.name.label("class_name"),
        Course.name.label("course_name"),
        Course.code.label("course_code"),
        Faculty.name.label("faculty_name"),
        User.name.label("lecturer_name"),
    )


def with_report_joins(stmt: Select) -> Select:
    return (
        stmt.select_from(Report)
        .outerjoin(StudentClass, Report.class_id == StudentClass.id)
        .outerjoin(Course, Report.course_id == Course.id)
        .outerjoin(Faculty, Report.faculty_id == Faculty.id)
        .outerjoin(User, Report.lecturer_id == User.id)
    )


def role_report_filter(user: User):
    """
    Which reports a role may list.

    lecturer -> own reports, student -> own class, prl -> own faculty,
    pl/fmg -> everything (None means no filter).
    """
    if user.role == UserRole.LECTURER:
        return Report.lecturer_id == user.id
    if user.role == UserRole.STUDENT:
        return Report.class_id == user.class_id
    if user.role == UserRole.PRL:
        return Report.faculty_id == user.faculty_id
    return None


class ReportService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = DirectoryService(db)

    async def get_report(self, report_id: int) -> Report:
        report = await self.db.get(Report, report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    async def create_report(self, actor: User, data: ReportCreate, today: Optional[date] = None) -> Report:
        if not actor.is_staff:
            raise AuthorizationError("Only teaching staff can create reports")

        student_class = await self.directory.require_class(data.class_id)
        course = await self.directory.require_course(data.course_id)

        if student_class.course_id != course.id:
            raise ValidationError("Class does not belong to the selected course", field="class_id")

        if data.students_present > student_class.total_students:
            raise ValidationError(
                f"Students present ({data.students_present}) cannot exceed "
                f"total students in class ({student_class.total_students})",
                field="students_present",
            )

        if data.date_of_lecture > (today or date.today()):
            raise ValidationError("Date of lecture cannot be in the future", field="date_of_lecture")

        report = Report(
            faculty_id=actor.faculty_id,
            class_id=student_class.id,
            course_id=course.id,
            lecturer_id=actor.id,
            week_number=data.week_number,
            date_of_lecture=data.date_of_lecture,
            students_present=data.students_present,
            venue=data.venue,
            scheduled_time=data.scheduled_time,
            topic_taught=data.topic_taught,
            learning_outcomes=data.learning_outcomes,
            recommendations=data.recommendations,
            status=ReportStatus.PENDING,
        )
        self.db.add(report)
        await commit_or_raise(self.db, "create_report")
        await self.db.refresh(report)

        logger.log_domain_event("Report", "created", report.id, class_id=report.class_id)
        return report

    async def sign_report(self, actor: User, data: ReportSign) -> Report:
        """Class representative of the report's class signs a pending report, once"""
        report = await self.get_report(data.report_id)

        if not (
            actor.role == UserRole.STUDENT
            and actor.is_class_rep
            and actor.class_id is not None
            and actor.class_id == report.class_id
        ):
            raise AuthorizationError("Only the class representative of this class can sign the report")

        if report.status != ReportStatus.PENDING:
            raise ConflictError("Report has already been signed")

        # Only a still-pending row is updated, so a report is signed exactly once
        result = await self.db.execute(
            update(Report)
            .where(Report.id == report.id, Report.status == ReportStatus.PENDING)
            .values(
                student_signature=data.signature,
                signed_at=datetime.utcnow(),
                status=ReportStatus.SIGNED,
            )
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ConflictError("Report has already been signed")
        await commit_or_raise(self.db, "sign_report")
        await self.db.refresh(report)

        logger.log_domain_event("Report", "signed", report.id, signed_by=actor.id)
        return report

    async def list_reports(self, actor: User) -> List[Dict[str, Any]]:
        stmt = with_report_joins(select(*report_detail_columns()))
        condition = role_report_filter(actor)
        if condition is not None:
            stmt = stmt.where(condition)
        stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())

        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def monitoring(self, actor: User, status: Optional[ReportStatus] = None) -> List[Dict[str, Any]]:
        """
        Reports with rating_count and average_rating.

        prl/pl see their faculty, a lecturer their own reports,
        fmg and students everything.
        """
        stmt = with_report_joins(
            select(
                *report_detail_columns(),
                func.count(Rating.id.distinct()).label("rating_count"),
                func.avg(Rating.rating).label("average_rating"),
            )
        ).outerjoin(Rating, Rating.report_id == Report.id)

        if actor.role in (UserRole.PRL, UserRole.PL):
            stmt = stmt.where(Report.faculty_id == actor.faculty_id)
        elif actor.role == UserRole.LECTURER:
            stmt = stmt.where(Report.lecturer_id == actor.id)

        if status is not None:
            stmt = stmt.where(Report.status == status)

        stmt = (
            stmt.group_by(Report.id, StudentClass.name, Course.name, Course.code, Faculty.name, User.name)
            .order_by(Report.created_at.desc(), Report.id.desc())
        )

        result = await self.db.execute(stmt)
        rows = []
        for row in result.mappings().all():
            item = dict(row)
            if item["average_rating"] is not None:
                item["average_rating"] = round(float(item["average_rating"]), 2)
            rows.append(item)
        return rows
