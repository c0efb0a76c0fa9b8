from sqlalchemy import (
    Column, String, Integer, Date, DateTime, Text, ForeignKey,
    Enum as SQLEnum, CheckConstraint,
)
from datetime import datetime
import enum

from faculty_portal.core.database import Base
from faculty_portal.models.user import enum_values


class ReportStatus(str, enum.Enum):
    """pending -> signed -> reviewed, never backwards"""
    PENDING = "pending"
    SIGNED = "signed"
    REVIEWED = "reviewed"


class Report(Base):
    """A lecture given by teaching staff to one class"""
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint("students_present >= 0", name="ck_reports_students_present"),
        CheckConstraint("week_number >= 1", name="ck_reports_week_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    week_number = Column(Integer, nullable=False)
    date_of_lecture = Column(Date, nullable=False)
    students_present = Column(Integer, nullable=False)
    venue = Column(String(255), nullable=False)
    scheduled_time = Column(String(50), nullable=False)
    topic_taught = Column(Text, nullable=False)
    learning_outcomes = Column(Text, nullable=False)
    recommendations = Column(Text, nullable=True)

    status = Column(
        SQLEnum(ReportStatus, name="report_status", values_callable=enum_values),
        default=ReportStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Class representative signature (data URL from the signature pad)
    student_signature = Column(Text, nullable=True)
    signed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Report {self.id} week={self.week_number} status={self.status}>"
