"""
Rating Service - 1 to 5 scores on reports or on lecturers.

One rating per (rater, report) and per (rater, lecturer). The friendly
pre-check handles the common case; the unique constraints on the ratings
table settle concurrent duplicates, surfacing as the same ConflictError.
"""

from typing import Any, Dict, List
from sqlalchemy import select, case, or_
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    UserNotFoundError,
    ValidationError,
)
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import StudentClass
from faculty_portal.models.rating import Rating
from faculty_portal.models.report import Report
from faculty_portal.models.user import User, UserRole, STAFF_ROLES
from faculty_portal.schemas.rating import RatingCreate
from faculty_portal.services.report_service import ReportService


class RatingService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.reports = ReportService(db)

    async def submit(self, actor: User, data: RatingCreate) -> Rating:
        if data.report_id is None and data.lecturer_id is None:
            raise ValidationError("Either report_id or lecturer_id must be provided")
        if data.report_id is not None and data.lecturer_id is not None:
            raise ValidationError("Rate either a report or a lecturer, not both")

        if data.report_id is not None:
            target_kind = "report"
            report = await self.reports.get_report(data.report_id)
            if actor.role == UserRole.STUDENT and actor.class_id != report.class_id:
                raise AuthorizationError("You can only rate reports for your own class")
            duplicate = Rating.report_id == report.id
        else:
            target_kind = "lecturer"
            if data.lecturer_id == actor.id:
                raise ValidationError("You cannot rate yourself")
            lecturer = await self.db.get(User, data.lecturer_id)
            if lecturer is None:
                raise UserNotFoundError(data.lecturer_id)
            if not lecturer.is_staff:
                raise ValidationError("Only teaching staff can be rated", field="lecturer_id")
            duplicate = Rating.lecturer_id == lecturer.id

        existing = await self.db.execute(
            select(Rating.id).where(Rating.student_id == actor.id, duplicate)
        )
        if existing.first() is not None:
            raise ConflictError(f"You have already rated this {target_kind}")

        rating = Rating(
            report_id=data.report_id,
            lecturer_id=data.lecturer_id,
            student_id=actor.id,
            rating=data.rating,
            comment=data.comment,
        )
        self.db.add(rating)
        await commit_or_raise(self.db, "submit_rating")
        await self.db.refresh(rating)

        logger.log_domain_event("Rating", "submitted", rating.id, target=target_kind, score=rating.rating)
        return rating

    async def list_ratings(self, actor: User) -> List[Dict[str, Any]]:
        """
        student -> ratings they gave; lecturer -> ratings on their reports
        or about them; prl/pl/fmg -> ratings tied to their faculty.
        """
        rated_lecturer = aliased(User)
        rater = aliased(User)

        stmt = (
            select(
                *Rating.__table__.columns,
                case((Rating.lecturer_id.isnot(None), "lecturer"), else_="report").label("rating_type"),
                Report.topic_taught,
                StudentClass.name.label("class_name"),
                rated_lecturer.name.label("lecturer_name"),
                rater.name.label("student_name"),
            )
            .select_from(Rating)
            .outerjoin(Report, Rating.report_id == Report.id)
            .outerjoin(StudentClass, Report.class_id == StudentClass.id)
            .outerjoin(rated_lecturer, Rating.lecturer_id == rated_lecturer.id)
            .outerjoin(rater, Rating.student_id == rater.id)
        )

        if actor.role == UserRole.STUDENT:
            stmt = stmt.where(Rating.student_id == actor.id)
        elif actor.role == UserRole.LECTURER:
            stmt = stmt.where(or_(Report.lecturer_id == actor.id, Rating.lecturer_id == actor.id))
        else:
            stmt = stmt.where(or_(
                Report.faculty_id == actor.faculty_id,
                rated_lecturer.faculty_id == actor.faculty_id,
            ))

        stmt = stmt.order_by(Rating.created_at.desc(), Rating.id.desc())
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def rateable_lecturers(self, actor: User) -> List[Dict[str, Any]]:
        """Teaching staff of the caller's faculty, excluding the caller"""
        stmt = (
            select(User.id, User.name, User.email, User.role)
            .where(
                User.faculty_id == actor.faculty_id,
                User.role.in_(STAFF_ROLES),
                User.id != actor.id,
            )
            .order_by(User.name)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
