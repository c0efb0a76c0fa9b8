from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from datetime import datetime

from faculty_portal.core.database import Base


class Rating(Base):
    """
    A 1-5 score left by a user on either a report or a lecturer.

    student_id is the rater (any role may rate). Each rater gets one rating
    per report and one per lecturer; the unique constraints hold that even
    under concurrent submissions.
    """
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("student_id", "report_id", name="uq_ratings_student_report"),
        UniqueConstraint("student_id", "lecturer_id", name="uq_ratings_student_lecturer"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_rating_range"),
        CheckConstraint(
            "(report_id IS NULL) <> (lecturer_id IS NULL)",
            name="ck_ratings_single_target",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=True, index=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def rating_type(self) -> str:
        return "report" if self.report_id is not None else "lecturer"

    def __repr__(self):
        return f"<Rating {self.rating} by {self.student_id} ({self.rating_type})>"
