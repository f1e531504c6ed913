from datetime import datetime, timedelta, timezone

import pytest

from family_logbook.application.logbooks.create_logbook import create_logbook, check_slug_availability
from family_logbook.application.logbooks.stats import get_logbook_stats
from family_logbook.application.logbooks.invites import (
    create_invite_code,
    validate_invite_code,
    redeem_invite_code,
)
from family_logbook.application.logbooks.members import (
    change_member_role,
    revoke_member,
    get_membership,
)
from family_logbook.application.logbooks.update_theme import update_logbook_theme
from family_logbook.domain.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDenied,
    ValidationError,
)
from family_logbook.extensions import db


class TestCreateLogbook:
    def test_creator_becomes_parent(self, logbook, parent):
        membership = get_membership(logbook_id=logbook.id, user_id=parent.id)

        assert logbook.slug == "smith-family"
        assert logbook.theme == "forest-light"
        assert membership.role == "parent"

    def test_derived_slug_collision_gets_suffix(self, logbook, parent):
        other = create_logbook(actor_id=parent.id, data={"name": "Smith Family"})

        assert other.slug != logbook.slug
        assert other.slug.startswith("smith-family-")

    def test_explicit_slug_taken(self, logbook, parent):
        with pytest.raises(ConflictError):
            create_logbook(actor_id=parent.id, data={"name": "Other", "slug": "smith-family"})

    def test_due_date_parsed(self, parent):
        logbook = create_logbook(actor_id=parent.id, data={"name": "Lee", "due_date": "2026-03-14"})
        assert logbook.due_date.isoformat() == "2026-03-14"

    def test_bad_due_date(self, parent):
        with pytest.raises(ValidationError):
            create_logbook(actor_id=parent.id, data={"name": "Lee", "due_date": "soon"})

    def test_unknown_theme(self, parent):
        with pytest.raises(ValidationError):
            create_logbook(actor_id=parent.id, data={"name": "Lee", "theme": "neon"})

    @pytest.mark.parametrize(
        "data",
        [{"name": 5}, {"name": "Lee", "slug": 7}, {"name": "Lee", "baby_name": ["Sam"]}, {"name": "Lee", "due_date": 20260314}],
    )
    def test_non_string_input(self, parent, data):
        with pytest.raises(ValidationError):
            create_logbook(actor_id=parent.id, data=data)

    def test_accented_name_gives_ascii_slug(self, parent):
        assert create_logbook(actor_id=parent.id, data={"name": "Café Lee"}).slug == "cafe-lee"

    def test_name_without_ascii_letters(self, parent):
        assert create_logbook(actor_id=parent.id, data={"name": "日本"}).slug == "logbook"

    def test_reserved_slug(self, parent):
        with pytest.raises(ConflictError):
            create_logbook(actor_id=parent.id, data={"name": "Other", "slug": "slug-available"})

    def test_slug_availability(self, logbook):
        assert check_slug_availability("smith-family")["available"] is False
        assert check_slug_availability("jones-family") == {"slug": "jones-family", "available": True, "valid": True}
        assert check_slug_availability("Bad Slug") == {"slug": "Bad Slug", "available": False, "valid": False}
        assert check_slug_availability("slug-available")["available"] is False
        assert check_slug_availability(None)["valid"] is False


def test_stats_count_members(logbook, family_user, friend_user):
    assert get_logbook_stats(logbook_id=logbook.id) == {
        "member_count": 3,
        "photo_count": 0,
        "comment_count": 0,
    }


def test_theme_change_is_parent_only(logbook, parent, family_user):
    assert update_logbook_theme(logbook_id=logbook.id, actor_id=parent.id, theme="soft-pastels").theme == "soft-pastels"

    with pytest.raises(PermissionDenied):
        update_logbook_theme(logbook_id=logbook.id, actor_id=family_user.id, theme="forest-dark")


class TestRoles:
    def test_promote_member(self, logbook, parent, family_user):
        member = change_member_role(
            logbook_id=logbook.id, actor_id=parent.id, user_id=family_user.id, role="parent",
        )
        assert member.role == "parent"

    def test_last_parent_cannot_step_down(self, logbook, parent):
        with pytest.raises(ConflictError):
            change_member_role(
                logbook_id=logbook.id, actor_id=parent.id, user_id=parent.id, role="family",
            )

    def test_last_parent_cannot_be_removed(self, logbook, parent):
        with pytest.raises(ConflictError):
            revoke_member(logbook_id=logbook.id, actor_id=parent.id, user_id=parent.id)

    def test_parent_can_leave_when_another_remains(self, logbook, parent, second_parent):
        revoke_member(logbook_id=logbook.id, actor_id=second_parent.id, user_id=parent.id)

        assert get_membership(logbook_id=logbook.id, user_id=parent.id) is None

    def test_family_cannot_change_roles(self, logbook, family_user, friend_user):
        with pytest.raises(PermissionDenied):
            change_member_role(
                logbook_id=logbook.id, actor_id=family_user.id, user_id=friend_user.id, role="family",
            )

    def test_invalid_role(self, logbook, parent, family_user):
        with pytest.raises(ValidationError):
            change_member_role(
                logbook_id=logbook.id, actor_id=parent.id, user_id=family_user.id, role="owner",
            )

    def test_unknown_member(self, logbook, parent, outsider):
        with pytest.raises(NotFoundError):
            revoke_member(logbook_id=logbook.id, actor_id=parent.id, user_id=outsider.id)


class TestInvites:
    def test_code_shape_and_defaults(self, logbook, parent):
        invite = create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="family")

        assert len(invite.code) == 8
        assert invite.code.isalnum() and invite.code.upper() == invite.code
        assert invite.max_uses == 10
        assert invite.expires_at is None

    def test_parent_role_not_invitable(self, logbook, parent):
        with pytest.raises(ValidationError):
            create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="parent")

    @pytest.mark.parametrize("max_uses", [0, 101, "5"])
    def test_max_uses_bounds(self, logbook, parent, max_uses):
        with pytest.raises(ValidationError):
            create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="friend", max_uses=max_uses)

    def test_friend_cannot_create(self, logbook, friend_user):
        with pytest.raises(PermissionDenied):
            create_invite_code(logbook_id=logbook.id, actor_id=friend_user.id, role="friend")

    def test_redeem_grants_role(self, logbook, parent, outsider):
        invite = create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="friend")

        membership = redeem_invite_code(code=invite.code.lower(), user_id=outsider.id)

        assert membership.role == "friend"
        assert membership.logbook_id == logbook.id
        assert invite.uses_count == 1

    def test_redeem_twice(self, logbook, parent, outsider):
        invite = create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="friend")
        redeem_invite_code(code=invite.code, user_id=outsider.id)

        with pytest.raises(ConflictError):
            redeem_invite_code(code=invite.code, user_id=outsider.id)

    def test_exhausted_code(self, logbook, parent, make_user):
        invite = create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="family", max_uses=1)
        redeem_invite_code(code=invite.code, user_id=make_user("a@example.com").id)

        with pytest.raises(ValidationError):
            redeem_invite_code(code=invite.code, user_id=make_user("b@example.com").id)

    def test_expired_code(self, logbook, parent):
        invite = create_invite_code(logbook_id=logbook.id, actor_id=parent.id, role="family", expires_in_days=1)
        invite.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        db.session.commit()

        with pytest.raises(ValidationError):
            validate_invite_code(invite.code)

    def test_unknown_code(self, app):
        with pytest.raises(NotFoundError):
            validate_invite_code("NOPE1234")
