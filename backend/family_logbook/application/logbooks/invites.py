# family_logbook/application/logbooks/invites.py
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from family_logbook.extensions import db
from family_logbook.models.invite_code import InviteCode
from family_logbook.models.logbook_member import LogbookMember
from family_logbook.domain.exceptions import ValidationError, NotFoundError, ConflictError
from family_logbook.domain.invariants.membership import assert_role, INVITABLE_ROLES
from family_logbook.utils.audit import log_action
from family_logbook.utils.slug import generate_invite_code
from family_logbook.utils.transaction import transactional
from .members import require_parent, get_membership

MAX_CODE_ATTEMPTS = 10


def _unique_code() -> str:
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_invite_code()
        if InviteCode.query.filter_by(code=code).first() is None:
            return code
    raise ConflictError("Failed to generate unique invite code")


def create_invite_code(
    *,
    logbook_id: str,
    actor_id: str,
    role: str,
    max_uses: Optional[int] = None,
    expires_in_days: Optional[int] = None,
) -> InviteCode:
    """
    Parent-only. Invites grant family or friend, never parent.
    """
    require_parent(logbook_id=logbook_id, user_id=actor_id)
    assert_role(role, INVITABLE_ROLES)

    limit = current_app.config["INVITE_CODE_MAX_USES_LIMIT"]
    if max_uses is None:
        max_uses = current_app.config["INVITE_CODE_MAX_USES"]
    if not isinstance(max_uses, int) or isinstance(max_uses, bool) or not 1 <= max_uses <= limit:
        raise ValidationError(f"max_uses must be between 1 and {limit}")

    expires_at = None
    if expires_in_days is not None:
        if not isinstance(expires_in_days, int) or isinstance(expires_in_days, bool):
            raise ValidationError("expires_in_days must be an integer")
        if expires_in_days > 0:
            expires_at = datetime.now(timezone.utc) + timedelta(days=expires_in_days)

    invite = InviteCode()
    invite.code = _unique_code()
    invite.logbook_id = logbook_id
    invite.role = role
    invite.max_uses = max_uses
    invite.uses_count = 0
    invite.expires_at = expires_at
    invite.created_by = actor_id

    with transactional():
        db.session.add(invite)
        db.session.flush()

        log_action(
            action="invite.create",
            entity_type="invite",
            entity_id=invite.id,
            logbook_id=logbook_id,
            actor_id=actor_id,
            payload={"role": role, "max_uses": max_uses},
        )

    return invite


def list_invite_codes(*, logbook_id: str, actor_id: str) -> List[InviteCode]:
    require_parent(logbook_id=logbook_id, user_id=actor_id)
    return (
        InviteCode.query
        .filter_by(logbook_id=logbook_id)
        .order_by(InviteCode.created_at.desc())
        .all()
    )


def delete_invite_code(*, logbook_id: str, actor_id: str, invite_id: str) -> None:
    require_parent(logbook_id=logbook_id, user_id=actor_id)

    invite = InviteCode.query.filter_by(id=invite_id, logbook_id=logbook_id).first()
    if invite is None:
        raise NotFoundError("Invite code not found")

    with transactional():
        db.session.delete(invite)

        log_action(
            action="invite.delete",
            entity_type="invite",
            entity_id=invite_id,
            logbook_id=logbook_id,
            actor_id=actor_id,
        )


def _assert_redeemable(invite: Optional[InviteCode]) -> InviteCode:
    if invite is None:
        raise NotFoundError("Invalid invite code")
    if invite.is_expired():
        raise ValidationError("Invite code has expired")
    if invite.is_exhausted:
        raise ValidationError("Invite code has reached its maximum uses")
    return invite


def _normalize_code(code) -> str:
    if not isinstance(code, str):
        raise ValidationError("Invite code must be a string")
    return code.strip().upper()


def validate_invite_code(code: str) -> InviteCode:
    """Read-only check; redemption re-checks under lock."""
    return _assert_redeemable(InviteCode.query.filter_by(code=_normalize_code(code)).first())


def redeem_in_transaction(*, code: str, user_id: str) -> LogbookMember:
    """
    Redemption steps without the commit, for callers that already hold a
    unit of work (signup creates the account in the same transaction).
    """
    invite = db.session.execute(
        select(InviteCode)
        .where(InviteCode.code == _normalize_code(code))
        .with_for_update()
    ).scalar_one_or_none()

    _assert_redeemable(invite)
    if get_membership(logbook_id=invite.logbook_id, user_id=user_id):
        raise ConflictError("You are already a member of this logbook")

    membership = LogbookMember()
    membership.logbook_id = invite.logbook_id
    membership.user_id = user_id
    membership.role = invite.role
    db.session.add(membership)

    invite.uses_count = invite.uses_count + 1

    log_action(
        action="invite.redeem",
        entity_type="invite",
        entity_id=invite.id,
        logbook_id=invite.logbook_id,
        actor_id=user_id,
        payload={"role": invite.role, "uses_count": invite.uses_count},
    )
    return membership


def redeem_invite_code(*, code: str, user_id: str) -> LogbookMember:
    """
    Join a logbook with the role carried by the invite.

    Edge cases handled:
    - Unknown code
    - Expired code
    - Code with no remaining uses
    - Caller already a member
    """
    try:
        with transactional():
            membership = redeem_in_transaction(code=code, user_id=user_id)

    except IntegrityError as exc:
        raise ConflictError("You are already a member of this logbook") from exc

    current_app.logger.info("User %s joined logbook %s as %s", user_id, membership.logbook_id, membership.role)
    return membership
