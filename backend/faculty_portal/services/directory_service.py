"""
Directory Service - faculties, courses and classes.

Reference data for registration choice lists and the foreign-key checks
the other services run before writing.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.exceptions import (
    AuthorizationError,
    ClassNotFoundError,
    CourseNotFoundError,
)
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import Faculty, Course, StudentClass
from faculty_portal.models.user import User, UserRole
from faculty_portal.schemas.academic import ClassCreate


def _class_columns():
    return (
        StudentClass.id,
        StudentClass.name,
        StudentClass.course_id,
        StudentClass.total_students,
        Course.name.label("course_name"),
        Course.code.label("course_code"),
    )


class DirectoryService:

    def __init__(self, db: AsyncSession):
        self.db = db

    # ---------- lookups used by other services ----------

    async def require_course(self, course_id: int) -> Course:
        course = await self.db.get(Course, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    async def require_class(self, class_id: int) -> StudentClass:
        student_class = await self.db.get(StudentClass, class_id)
        if student_class is None:
            raise ClassNotFoundError(class_id)
        return student_class

    # ---------- public choice lists ----------

    async def list_faculties(self) -> List[Faculty]:
        result = await self.db.execute(select(Faculty).order_by(Faculty.name))
        return list(result.scalars().all())

    async def list_courses(self) -> List[Dict[str, Any]]:
        stmt = (
            select(
                Course.id,
                Course.name,
                Course.code,
                Course.faculty_id,
                Faculty.name.label("faculty_name"),
            )
            .outerjoin(Faculty, Course.faculty_id == Faculty.id)
            .order_by(Course.code)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def list_classes(self, faculty_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """All classes, or only those whose course belongs to faculty_id"""
        stmt = select(*_class_columns()).outerjoin(Course, StudentClass.course_id == Course.id)
        if faculty_id is not None:
            stmt = stmt.where(Course.faculty_id == faculty_id)
        stmt = stmt.order_by(StudentClass.name)

        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def get_class(self, class_id: int) -> Dict[str, Any]:
        stmt = (
            select(*_class_columns())
            .outerjoin(Course, StudentClass.course_id == Course.id)
            .where(StudentClass.id == class_id)
        )
        row = (await self.db.execute(stmt)).mappings().first()
        if row is None:
            raise ClassNotFoundError(class_id)
        return dict(row)

    # ---------- writes ----------

    async def create_class(self, actor: User, data: ClassCreate) -> Dict[str, Any]:
        """PL adds a class to a course of their own faculty"""
        course = await self.require_course(data.course_id)
        if course.faculty_id != actor.faculty_id:
            raise AuthorizationError("Can only create classes within your faculty")

        student_class = StudentClass(
            name=data.name,
            course_id=data.course_id,
            total_students=data.total_students,
        )
        self.db.add(student_class)
        await commit_or_raise(self.db, "create_class")
        await self.db.refresh(student_class)

        logger.log_domain_event("Class", "created", student_class.id, course_id=course.id)
        return {
            "id": student_class.id,
            "name": student_class.name,
            "course_id": student_class.course_id,
            "total_students": student_class.total_students,
            "course_name": course.name,
            "course_code": course.code,
        }

    # ---------- people ----------

    async def users_by_role(self, actor: User, role: UserRole) -> List[Dict[str, Any]]:
        """Users holding a role inside the caller's faculty"""
        stmt = (
            select(User.id, User.name, User.email)
            .where(User.role == role, User.faculty_id == actor.faculty_id)
            .order_by(User.name)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
