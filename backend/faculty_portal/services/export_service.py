"""
Export Service - the caller's data as an .xlsx workbook.

One sheet per data type:
- Lecture Reports: same role filter as GET /reports, by date of lecture
- Complaints: complaints the caller filed
- Ratings: ratings the caller gave
- All Activities: reports the caller wrote plus complaints the caller filed

The date range is applied only when both bounds are given. The end date
is inclusive.
"""

from datetime import date, datetime, time, timedelta
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.config import settings
from faculty_portal.core.exceptions import ValidationError
from faculty_portal.core.logging_config import logger
from faculty_portal.models.academic import Course, StudentClass
from faculty_portal.models.complaint import Complaint
from faculty_portal.models.rating import Rating
from faculty_portal.models.report import Report
from faculty_portal.models.user import User
from faculty_portal.services.report_service import role_report_filter

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_TYPES = ("reports", "complaints", "ratings", "activities", "all")

# (header, key, width)
Column = Tuple[str, str, int]

REPORT_COLUMNS: Sequence[Column] = (
    ("ID", "id", 10),
    ("Class", "class_name", 20),
    ("Course", "course_name", 25),
    ("Week", "week_number", 10),
    ("Date", "date_of_lecture", 15),
    ("Students Present", "students_present", 15),
    ("Venue", "venue", 15),
    ("Scheduled Time", "scheduled_time", 15),
    ("Topic Taught", "topic_taught", 40),
    ("Learning Outcomes", "learning_outcomes", 40),
    ("Recommendations", "recommendations", 30),
    ("Status", "status", 15),
    ("Created Date", "created_at", 20),
)

COMPLAINT_COLUMNS: Sequence[Column] = (
    ("ID", "id", 10),
    ("Complaint Against", "complaint_against_name", 25),
    ("Complaint Text", "complaint_text", 40),
    ("Response", "response_text", 40),
    ("Status", "status", 15),
    ("Created Date", "created_at", 20),
    ("Responded Date", "responded_at", 20),
)

RATING_COLUMNS: Sequence[Column] = (
    ("ID", "id", 10),
    ("Class", "class_name", 20),
    ("Topic", "topic_taught", 40),
    ("Rating", "rating", 10),
    ("Comment", "comment", 30),
    ("Created Date", "created_at", 20),
)

ACTIVITY_COLUMNS: Sequence[Column] = (
    ("Activity Type", "type", 15),
    ("Description", "description", 50),
    ("Date", "date", 20),
    ("Status", "status", 15),
    ("Details", "details", 30),
)


def _fmt_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "N/A"


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _course_label(code: Optional[str], name: Optional[str]) -> str:
    return f"{code} - {name}" if code else "N/A"


def _day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """[start 00:00, day after end 00:00) so the end date is inclusive"""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def _write_sheet(wb: Workbook, title: str, columns: Sequence[Column],
                 rows: List[Dict[str, Any]], header_color: str) -> None:
    ws = wb.create_sheet(title)
    ws.append([header for header, _, _ in columns])
    for row in rows:
        ws.append([row.get(key) for _, key, _ in columns])

    header_font = Font(bold=True)
    header_fill = PatternFill(start_color=header_color, end_color=header_color, fill_type="solid")
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill

    for index, (_, _, width) in enumerate(columns, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width


class ExportService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def export_user_data(
        self,
        actor: User,
        data_type: str = "all",
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> bytes:
        """Build the workbook and return it serialized"""
        if data_type not in EXPORT_TYPES:
            raise ValidationError(
                f"Invalid data_type. Choose one of: {', '.join(EXPORT_TYPES)}",
                field="data_type",
            )

        date_range = (start_date, end_date) if start_date and end_date else None
        if date_range and start_date > end_date:
            raise ValidationError("start_date must not be after end_date", field="start_date")

        sheets: List[Tuple[str, str, Sequence[Column], Callable, str]] = [
            ("reports", "Lecture Reports", REPORT_COLUMNS, self._report_rows, "E6E6FA"),
            ("complaints", "Complaints", COMPLAINT_COLUMNS, self._complaint_rows, "FFE4E1"),
            ("ratings", "Ratings", RATING_COLUMNS, self._rating_rows, "E6FFE6"),
            ("activities", "All Activities", ACTIVITY_COLUMNS, self._activity_rows, "F0F8FF"),
        ]

        wb = Workbook()
        wb.remove(wb.active)
        wb.properties.creator = settings.EXPORT_CREATOR

        for kind, title, columns, fetch, color in sheets:
            if data_type in (kind, "all"):
                rows = await fetch(actor, date_range)
                _write_sheet(wb, title, columns, rows, color)

        buffer = BytesIO()
        wb.save(buffer)

        logger.log_domain_event(
            "Export", "generated", None,
            data_type=data_type, sheets=len(wb.sheetnames), user_id=actor.id,
        )
        return buffer.getvalue()

    # ---------- sheet queries ----------

    async def _report_rows(self, actor: User, date_range) -> List[Dict[str, Any]]:
        stmt = (
            select(
                Report,
                StudentClass.name.label("class_name"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
            )
            .outerjoin(StudentClass, Report.class_id == StudentClass.id)
            .outerjoin(Course, Report.course_id == Course.id)
        )
        condition = role_report_filter(actor)
        if condition is not None:
            stmt = stmt.where(condition)
        if date_range:
            stmt = stmt.where(Report.date_of_lecture.between(*date_range))
        stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())

        rows = []
        for report, class_name, course_name, course_code in (await self.db.execute(stmt)).all():
            rows.append({
                "id": report.id,
                "class_name": class_name,
                "course_name": _course_label(course_code, course_name),
                "week_number": report.week_number,
                "date_of_lecture": report.date_of_lecture.isoformat(),
                "students_present": report.students_present,
                "venue": report.venue,
                "scheduled_time": report.scheduled_time,
                "topic_taught": report.topic_taught,
                "learning_outcomes": report.learning_outcomes,
                "recommendations": report.recommendations or "N/A",
                "status": _enum_value(report.status),
                "created_at": _fmt_datetime(report.created_at),
            })
        return rows

    async def _complaint_rows(self, actor: User, date_range) -> List[Dict[str, Any]]:
        target = aliased(User)
        stmt = (
            select(Complaint, target.name.label("complaint_against_name"))
            .outerjoin(target, Complaint.complaint_against_id == target.id)
            .where(Complaint.complainant_id == actor.id)
        )
        if date_range:
            lower, upper = _day_bounds(*date_range)
            stmt = stmt.where(Complaint.created_at >= lower, Complaint.created_at < upper)
        stmt = stmt.order_by(Complaint.created_at.desc(), Complaint.id.desc())

        return [
            {
                "id": complaint.id,
                "complaint_against_name": against_name,
                "complaint_text": complaint.complaint_text,
                "response_text": complaint.response_text or "No response yet",
                "status": _enum_value(complaint.status),
                "created_at": _fmt_datetime(complaint.created_at),
                "responded_at": _fmt_datetime(complaint.responded_at),
            }
            for complaint, against_name in (await self.db.execute(stmt)).all()
        ]

    async def _rating_rows(self, actor: User, date_range) -> List[Dict[str, Any]]:
        stmt = (
            select(Rating, Report.topic_taught, StudentClass.name.label("class_name"))
            .outerjoin(Report, Rating.report_id == Report.id)
            .outerjoin(StudentClass, Report.class_id == StudentClass.id)
            .where(Rating.student_id == actor.id)
        )
        if date_range:
            lower, upper = _day_bounds(*date_range)
            stmt = stmt.where(Rating.created_at >= lower, Rating.created_at < upper)
        stmt = stmt.order_by(Rating.created_at.desc(), Rating.id.desc())

        return [
            {
                "id": rating.id,
                "class_name": class_name,
                "topic_taught": topic,
                "rating": f"{rating.rating}/5",
                "comment": rating.comment or "No comment",
                "created_at": _fmt_datetime(rating.created_at),
            }
            for rating, topic, class_name in (await self.db.execute(stmt)).all()
        ]

    async def _activity_rows(self, actor: User, date_range) -> List[Dict[str, Any]]:
        """Reports written and complaints filed by the caller, newest first"""
        bounds = _day_bounds(*date_range) if date_range else None

        report_stmt = (
            select(Report, StudentClass.name, Course.name)
            .outerjoin(StudentClass, Report.class_id == StudentClass.id)
            .outerjoin(Course, Report.course_id == Course.id)
            .where(Report.lecturer_id == actor.id)
        )
        target = aliased(User)
        complaint_stmt = (
            select(Complaint, target.name)
            .outerjoin(target, Complaint.complaint_against_id == target.id)
            .where(Complaint.complainant_id == actor.id)
        )
        if bounds:
            report_stmt = report_stmt.where(Report.created_at >= bounds[0], Report.created_at < bounds[1])
            complaint_stmt = complaint_stmt.where(
                Complaint.created_at >= bounds[0], Complaint.created_at < bounds[1]
            )

        activities = []
        for report, class_name, course_name in (await self.db.execute(report_stmt)).all():
            activities.append({
                "type": "Report",
                "description": f"Lecture report for {class_name} - {course_name}",
                "date": report.created_at,
                "status": _enum_value(report.status),
                "details": f"Students: {report.students_present}, Topic: {report.topic_taught[:50]}",
            })
        for complaint, against_name in (await self.db.execute(complaint_stmt)).all():
            activities.append({
                "type": "Complaint",
                "description": f"Complaint against {against_name}",
                "date": complaint.created_at,
                "status": _enum_value(complaint.status),
                "details": complaint.complaint_text[:50],
            })

        activities.sort(key=lambda item: item["date"], reverse=True)
        for item in activities:
            item["date"] = _fmt_datetime(item["date"])
        return activities


def export_filename(user_id: int) -> str:
    return f"faculty-activities-{user_id}-{datetime.utcnow().strftime('%Y%m%d%H%M%S')}.xlsx"
