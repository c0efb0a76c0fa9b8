from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Enum as SQLEnum, CheckConstraint
from datetime import datetime
import enum

from faculty_portal.core.database import Base
from faculty_portal.models.user import UserRole, enum_values


class ComplaintStatus(str, enum.Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


class Complaint(Base):
    """
    Complaint filed by one user against another.

    recipient_role is computed once at creation from the roles of both
    parties and decides who, besides the target, may respond.
    """
    __tablename__ = "complaints"
    __table_args__ = (
        CheckConstraint(
            "complainant_id <> complaint_against_id",
            name="ck_complaints_not_self",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    complainant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    complaint_against_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=True)
    complaint_text = Column(Text, nullable=False)

    status = Column(
        SQLEnum(ComplaintStatus, name="complaint_status", values_callable=enum_values),
        default=ComplaintStatus.PENDING,
        nullable=False,
        index=True,
    )
    recipient_role = Column(
        SQLEnum(UserRole, name="recipient_role", values_callable=enum_values),
        nullable=False,
        index=True,
    )

    response_text = Column(Text, nullable=True)
    responded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    responded_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Complaint {self.id} -> {self.recipient_role} ({self.status})>"
