"""
Academic directory: faculties, the courses they offer and the classes
enrolled in each course. Reference data for foreign-key checks and the
choice lists shown at registration.
"""

from sqlalchemy import Column, String, Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from faculty_portal.core.database import Base


class Faculty(Base):
    __tablename__ = "faculties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    courses = relationship("Course", back_populates="faculty")
    users = relationship("User", back_populates="faculty")

    def __repr__(self):
        return f"<Faculty {self.name}>"


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=False, index=True)

    faculty = relationship("Faculty", back_populates="courses")
    classes = relationship("StudentClass", back_populates="course")

    def __repr__(self):
        return f"<Course {self.code}>"


class StudentClass(Base):
    """A class (cohort) attending one course"""
    __tablename__ = "classes"
    __table_args__ = (
        UniqueConstraint("course_id", "name", name="uq_classes_course_name"),
        CheckConstraint("total_students >= 0", name="ck_classes_total_students"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    total_students = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="classes")
    students = relationship("User", back_populates="student_class")

    def __repr__(self):
        return f"<StudentClass {self.name}>"
