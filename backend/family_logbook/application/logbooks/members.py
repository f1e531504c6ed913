# family_logbook/application/logbooks/members.py
from datetime import datetime, timezone
from typing import List, Optional
from flask import current_app
from family_logbook.extensions import db
from family_logbook.models.logbook import Logbook
from family_logbook.models.logbook_member import LogbookMember
from family_logbook.domain.exceptions import NotFoundError, PermissionDenied
from family_logbook.domain.invariants.membership import assert_role, assert_parent_remains
from family_logbook.utils.audit import log_action
from family_logbook.utils.transaction import transactional


def get_logbook(logbook_id: str) -> Logbook:
    logbook = db.session.get(Logbook, logbook_id)
    if logbook is None:
        raise NotFoundError("Logbook not found")
    return logbook


def get_logbook_by_slug(slug: str) -> Logbook:
    logbook = Logbook.query.filter_by(slug=slug).first()
    if logbook is None:
        raise NotFoundError("Logbook not found")
    return logbook


def get_membership(*, logbook_id: str, user_id: Optional[str]) -> Optional[LogbookMember]:
    if not user_id:
        return None
    return LogbookMember.query.filter_by(logbook_id=logbook_id, user_id=user_id).first()


def require_member(*, logbook_id: str, user_id: Optional[str]) -> LogbookMember:
    """Any role may read. Non-members get the same answer as a missing logbook."""
    membership = get_membership(logbook_id=logbook_id, user_id=user_id)
    if membership is None:
        raise NotFoundError("Logbook not found or access denied")
    return membership


def require_parent(*, logbook_id: str, user_id: Optional[str]) -> LogbookMember:
    get_logbook(logbook_id)

    membership = get_membership(logbook_id=logbook_id, user_id=user_id)
    if membership is None or membership.role != "parent":
        current_app.logger.warning(
            "Permission denied: user=%s logbook=%s role=%s",
            user_id, logbook_id, membership.role if membership else None,
        )
        raise PermissionDenied("Only parents can perform this action")
    return membership


def touch_last_visited(membership: LogbookMember) -> None:
    with transactional():
        membership.last_visited_at = datetime.now(timezone.utc)


def list_members(*, logbook_id: str) -> List[LogbookMember]:
    return (
        LogbookMember.query
        .filter_by(logbook_id=logbook_id)
        .order_by(LogbookMember.created_at.asc())
        .all()
    )


def change_member_role(
    *,
    logbook_id: str,
    actor_id: str,
    user_id: str,
    role: str,
) -> LogbookMember:
    """
    Parent-only role change.

    Edge cases handled:
    - Unknown role
    - Target not a member
    - Demoting the last parent
    """
    require_parent(logbook_id=logbook_id, user_id=actor_id)
    assert_role(role)

    members = list_members(logbook_id=logbook_id)
    target = next((m for m in members if m.user_id == user_id), None)
    if target is None:
        raise NotFoundError("Member not found")

    assert_parent_remains(members, user_id=user_id, new_role=role)

    with transactional():
        previous = target.role
        target.role = role

        log_action(
            action="member.role_change",
            entity_type="member",
            entity_id=target.id,
            logbook_id=logbook_id,
            actor_id=actor_id,
            payload={"user_id": user_id, "from": previous, "to": role},
        )

    current_app.logger.info("Member %s role %s -> %s in logbook %s", user_id, previous, role, logbook_id)
    return target


def revoke_member(
    *,
    logbook_id: str,
    actor_id: str,
    user_id: str,
) -> None:
    require_parent(logbook_id=logbook_id, user_id=actor_id)

    members = list_members(logbook_id=logbook_id)
    target = next((m for m in members if m.user_id == user_id), None)
    if target is None:
        raise NotFoundError("Member not found")

    assert_parent_remains(members, user_id=user_id)

    with transactional():
        db.session.delete(target)

        log_action(
            action="member.revoke",
            entity_type="member",
            entity_id=target.id,
            logbook_id=logbook_id,
            actor_id=actor_id,
            payload={"user_id": user_id, "role": target.role},
        )

    current_app.logger.info("Member %s removed from logbook %s", user_id, logbook_id)
