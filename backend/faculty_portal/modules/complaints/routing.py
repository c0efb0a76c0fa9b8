"""
Complaint escalation hierarchy.

Who receives a complaint depends on the complainant's role and, for the
middle of the hierarchy, on the role of the person complained about:

    student  -> prl
    lecturer -> prl   (pl when the target is a prl)
    prl      -> pl    (fmg when the target is a pl)
    pl       -> fmg
    fmg      -> fmg

Both tables below are keyed by every UserRole. Adding a role without
extending them fails at import time.
"""

from typing import Callable, Dict, Mapping, Tuple

from sqlalchemy import or_, true
from sqlalchemy.sql.elements import ColumnElement

from faculty_portal.models.complaint import Complaint, ComplaintStatus
from faculty_portal.models.user import User, UserRole

# complainant role -> (default recipient, {target role: escalated recipient})
ROUTING_TABLE: Dict[UserRole, Tuple[UserRole, Mapping[UserRole, UserRole]]] = {
    UserRole.STUDENT: (UserRole.PRL, {}),
    UserRole.LECTURER: (UserRole.PRL, {UserRole.PRL: UserRole.PL}),
    UserRole.PRL: (UserRole.PL, {UserRole.PL: UserRole.FMG}),
    UserRole.PL: (UserRole.FMG, {}),
    UserRole.FMG: (UserRole.FMG, {}),
}


def _own(user: User) -> ColumnElement:
    return Complaint.complainant_id == user.id


# viewer role -> predicate over complaints for GET /complaints
VISIBILITY_RULES: Dict[UserRole, Callable[[User], ColumnElement]] = {
    UserRole.STUDENT: _own,
    UserRole.LECTURER: lambda user: or_(Complaint.complaint_against_id == user.id, _own(user)),
    UserRole.PRL: lambda user: or_(Complaint.recipient_role == user.role, _own(user)),
    UserRole.PL: lambda user: or_(Complaint.recipient_role == user.role, _own(user)),
    UserRole.FMG: lambda user: true(),
}


def _check_coverage() -> None:
    for name, table in (("ROUTING_TABLE", ROUTING_TABLE), ("VISIBILITY_RULES", VISIBILITY_RULES)):
        missing = set(UserRole) - set(table)
        if missing:
            raise RuntimeError(
                f"{name} has no entry for role(s): {', '.join(sorted(r.value for r in missing))}"
            )


_check_coverage()


def resolve_recipient_role(complainant_role: UserRole, target_role: UserRole) -> UserRole:
    """Role responsible for answering a complaint between these two roles"""
    default, escalations = ROUTING_TABLE[UserRole(complainant_role)]
    return escalations.get(UserRole(target_role), default)


def visibility_filter(user: User) -> ColumnElement:
    """
    WHERE clause for the general complaint list.

    Complaints filed against the viewer never show up here; they reach
    the target only through the for-response queue.
    """
    return (Complaint.complaint_against_id != user.id) & VISIBILITY_RULES[user.role](user)


def response_queue_filter(user: User) -> ColumnElement:
    """Pending complaints the user is expected to answer"""
    return (Complaint.status == ComplaintStatus.PENDING) & or_(
        Complaint.recipient_role == user.role,
        Complaint.complaint_against_id == user.id,
    )


def can_respond(user: User, complaint: Complaint) -> bool:
    """The recipient role or the person complained about may answer"""
    return user.role == complaint.recipient_role or user.id == complaint.complaint_against_id
