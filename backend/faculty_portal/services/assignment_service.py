"""
Assignment Service - Program Leaders assign lecturers to (course, class) pairs
"""

from typing import Any, Dict, List
from sqlalchemy import select
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.exceptions import AuthorizationError, UserNotFoundError, ValidationError
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import Course, StudentClass
from faculty_portal.models.assignment import Assignment
from faculty_portal.models.user import User, UserRole
from faculty_portal.schemas.assignment import AssignmentCreate
from faculty_portal.services.directory_service import DirectoryService


class AssignmentService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = DirectoryService(db)

    async def assign(self, actor: User, data: AssignmentCreate) -> Assignment:
        if actor.role != UserRole.PL:
            raise AuthorizationError("Only Program Leaders can assign courses")

        course = await self.directory.require_course(data.course_id)
        if course.faculty_id != actor.faculty_id:
            raise AuthorizationError("Can only assign courses within your faculty")

        lecturer = await self.db.get(User, data.lecturer_id)
        if lecturer is None:
            raise UserNotFoundError(data.lecturer_id)
        if lecturer.role != UserRole.LECTURER:
            raise ValidationError("Selected user is not a lecturer", field="lecturer_id")

        student_class = await self.directory.require_class(data.class_id)
        if student_class.course_id != course.id:
            raise ValidationError("Class does not belong to the selected course", field="class_id")

        assignment = Assignment(
            lecturer_id=lecturer.id,
            course_id=course.id,
            class_id=student_class.id,
            assigned_by=actor.id,
        )
        self.db.add(assignment)
        await commit_or_raise(self.db, "assign_course")
        await self.db.refresh(assignment)

        logger.log_domain_event(
            "Assignment", "created", assignment.id,
            lecturer_id=lecturer.id, course_id=course.id, class_id=student_class.id,
        )
        return assignment

    async def list_for_faculty(self, actor: User) -> List[Dict[str, Any]]:
        """Assignments whose course sits in the caller's faculty, newest first"""
        lecturer = aliased(User)
        assigner = aliased(User)
        stmt = (
            select(
                Assignment.id,
                Assignment.lecturer_id,
                Assignment.course_id,
                Assignment.class_id,
                Assignment.assigned_by,
                Assignment.assigned_at,
                lecturer.name.label("lecturer_name"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                StudentClass.name.label("class_name"),
                assigner.name.label("assigned_by_name"),
            )
            .join(Course, Assignment.course_id == Course.id)
            .outerjoin(lecturer, Assignment.lecturer_id == lecturer.id)
            .outerjoin(StudentClass, Assignment.class_id == StudentClass.id)
            .outerjoin(assigner, Assignment.assigned_by == assigner.id)
            .where(Course.faculty_id == actor.faculty_id)
            .order_by(Assignment.assigned_at.desc(), Assignment.id.desc())
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
