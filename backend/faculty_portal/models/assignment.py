from sqlalchemy import Column, Integer, DateTime, ForeignKey
from datetime import datetime

from faculty_portal.core.database import Base


class Assignment(Base):
    """Lecturer assigned to teach a course to a class, made by a PL"""
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    assigned_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Assignment lecturer={self.lecturer_id} course={self.course_id} class={self.class_id}>"
