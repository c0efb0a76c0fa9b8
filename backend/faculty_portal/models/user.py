from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from faculty_portal.core.database import Base


class UserRole(str, enum.Enum):
    """Portal roles, lowest to highest in the complaint hierarchy"""
    STUDENT = "student"
    LECTURER = "lecturer"
    PRL = "prl"
    PL = "pl"
    FMG = "fmg"


STAFF_ROLES = (UserRole.LECTURER, UserRole.PRL, UserRole.PL, UserRole.FMG)


def enum_values(enum_cls):
    """Persist enum values ("student") instead of member names ("STUDENT")"""
    return [member.value for member in enum_cls]


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    # Fixed at registration
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        index=True,
    )

    faculty_id = Column(Integer, ForeignKey("faculties.id"), nullable=False, index=True)

    # Students only
    is_class_rep = Column(Boolean, default=False, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=True, index=True)

    profile_image = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    faculty = relationship("Faculty", back_populates="users")
    student_class = relationship("StudentClass", back_populates="students")

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def __repr__(self):
        return f"<User {self.email} ({self.role.value if self.role else None})>"
