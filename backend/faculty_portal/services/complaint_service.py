"""
Complaint Service - filing, listing and answering complaints.

The recipient role is fixed when the complaint is filed (see
modules/complaints/routing.py). Answering is a one-time transition from
pending to resolved.
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select, update
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from faculty_portal.core.exceptions import (
    AuthorizationError,
    ComplaintNotFoundError,
    ConflictError,
    ReportNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import StudentClass
from faculty_portal.models.complaint import Complaint, ComplaintStatus
from faculty_portal.models.report import Report
from faculty_portal.models.user import User
from faculty_portal.modules.complaints.routing import (
    can_respond,
    resolve_recipient_role,
    response_queue_filter,
    visibility_filter,
)
from faculty_portal.schemas.complaint import ComplaintCreate, ComplaintRespond


def _detail_query() -> Select:
    complainant = aliased(User)
    target = aliased(User)
    responder = aliased(User)
    return (
        select(
            *Complaint.__table__.columns,
            complainant.name.label("complainant_name"),
            target.name.label("complaint_against_name"),
            Report.topic_taught.label("report_topic"),
            StudentClass.name.label("class_name"),
            responder.name.label("responder_name"),
        )
        .select_from(Complaint)
        .outerjoin(complainant, Complaint.complainant_id == complainant.id)
        .outerjoin(target, Complaint.complaint_against_id == target.id)
        .outerjoin(Report, Complaint.report_id == Report.id)
        .outerjoin(StudentClass, Report.class_id == StudentClass.id)
        .outerjoin(responder, Complaint.responded_by == responder.id)
    )


class ComplaintService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def file_complaint(self, actor: User, data: ComplaintCreate) -> Complaint:
        if data.complaint_against_id == actor.id:
            raise ValidationError("You cannot file a complaint against yourself")

        target = await self.db.get(User, data.complaint_against_id)
        if target is None:
            raise UserNotFoundError(data.complaint_against_id)

        if data.report_id is not None and await self.db.get(Report, data.report_id) is None:
            raise ReportNotFoundError(data.report_id)

        recipient_role = resolve_recipient_role(actor.role, target.role)

        complaint = Complaint(
            complainant_id=actor.id,
            complaint_against_id=target.id,
            report_id=data.report_id,
            complaint_text=data.complaint_text,
            status=ComplaintStatus.PENDING,
            recipient_role=recipient_role,
        )
        self.db.add(complaint)
        await commit_or_raise(self.db, "file_complaint")
        await self.db.refresh(complaint)

        logger.log_domain_event(
            "Complaint", "filed", complaint.id,
            complainant_role=actor.role.value,
            target_role=target.role.value,
            recipient_role=recipient_role.value,
        )
        return complaint

    async def list_visible(self, actor: User) -> List[Dict[str, Any]]:
        stmt = (
            _detail_query()
            .where(visibility_filter(actor))
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def list_for_response(self, actor: User) -> List[Dict[str, Any]]:
        stmt = (
            _detail_query()
            .where(response_queue_filter(actor))
            .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def respond(self, actor: User, data: ComplaintRespond) -> Complaint:
        complaint = await self.db.get(Complaint, data.complaint_id)
        if complaint is None:
            raise ComplaintNotFoundError(data.complaint_id)

        if not can_respond(actor, complaint):
            raise AuthorizationError("You are not authorized to respond to this complaint")

        if complaint.status != ComplaintStatus.PENDING:
            raise ConflictError("This complaint has already been resolved")

        # Conditional update so two concurrent answers cannot both win
        result = await self.db.execute(
            update(Complaint)
            .where(Complaint.id == complaint.id, Complaint.status == ComplaintStatus.PENDING)
            .values(
                response_text=data.response_text,
                status=ComplaintStatus.RESOLVED,
                responded_by=actor.id,
                responded_at=datetime.utcnow(),
            )
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ConflictError("This complaint has already been resolved")
        await commit_or_raise(self.db, "respond_complaint")
        await self.db.refresh(complaint)

        logger.log_domain_event("Complaint", "resolved", complaint.id, responded_by=actor.id)
        return complaint
