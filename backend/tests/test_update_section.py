import pytest

from family_logbook.application.content.resolve_page import resolve, resolve_cached
from family_logbook.application.content.update_section import (
    update_section,
    set_section_visibility,
    set_section_field,
    reset_section,
)
from family_logbook.domain.exceptions import NotFoundError, PermissionDenied, ValidationError
from family_logbook.domain.sections.merge import find_section
from family_logbook.models.section_override import SectionOverride


def test_parent_hides_section(logbook, parent):
    section = set_section_visibility(
        logbook_id=logbook.id, page_type="home", section_key="hero",
        visible=False, caller_id=parent.id,
    )

    assert section.key == "hero"
    assert section.visible is False
    assert find_section(resolve("home", logbook.id), "hero").visible is False


@pytest.mark.parametrize("member", ["family_user", "friend_user", "outsider"])
def test_non_parent_cannot_write(request, logbook, member):
    caller = request.getfixturevalue(member)
    before = resolve("home", logbook.id)

    with pytest.raises(PermissionDenied):
        set_section_visibility(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            visible=False, caller_id=caller.id,
        )

    assert resolve("home", logbook.id) == before
    assert SectionOverride.query.count() == 0


def test_set_field(logbook, parent):
    section = set_section_field(
        logbook_id=logbook.id, page_type="gallery", section_key="layout",
        field_name="columns", value=4, caller_id=parent.id,
    )

    assert section.fields == {"style": "grid", "columns": 4}


def test_unknown_field_rejected(logbook, parent):
    with pytest.raises(ValidationError):
        set_section_field(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            field_name="fontSize", value=12, caller_id=parent.id,
        )
    assert SectionOverride.query.count() == 0


def test_wrong_type_rejected(logbook, parent):
    with pytest.raises(ValidationError):
        set_section_field(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            field_name="showDueDate", value="yes", caller_id=parent.id,
        )


def test_nullable_field_accepts_none(logbook, parent):
    section = set_section_field(
        logbook_id=logbook.id, page_type="home", section_key="hero",
        field_name="imageUrl", value=None, caller_id=parent.id,
    )
    assert section.fields["imageUrl"] is None


def test_visibility_must_be_boolean(logbook, parent):
    with pytest.raises(ValidationError):
        set_section_visibility(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            visible="false", caller_id=parent.id,
        )


def test_role_checked_before_payload(logbook, family_user):
    with pytest.raises(PermissionDenied):
        set_section_visibility(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            visible=None, caller_id=family_user.id,
        )


def test_unknown_section(logbook, parent):
    with pytest.raises(NotFoundError):
        set_section_visibility(
            logbook_id=logbook.id, page_type="home", section_key="footer",
            visible=True, caller_id=parent.id,
        )


def test_empty_patch_rejected(logbook, parent):
    with pytest.raises(ValidationError):
        update_section(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            patch={"fields": {}}, caller_id=parent.id,
        )


def test_two_parents_disjoint_fields_both_kept(logbook, parent, second_parent):
    set_section_field(
        logbook_id=logbook.id, page_type="home", section_key="hero",
        field_name="title", value="Hello", caller_id=parent.id,
    )
    set_section_field(
        logbook_id=logbook.id, page_type="home", section_key="hero",
        field_name="subtitle", value="World", caller_id=second_parent.id,
    )

    hero = find_section(resolve("home", logbook.id), "hero")
    assert hero.fields["title"] == "Hello"
    assert hero.fields["subtitle"] == "World"


def test_update_invalidates_cached_page(logbook, parent):
    assert find_section(resolve_cached("home", logbook.id), "stats").visible is False

    set_section_visibility(
        logbook_id=logbook.id, page_type="home", section_key="stats",
        visible=True, caller_id=parent.id,
    )

    assert find_section(resolve_cached("home", logbook.id), "stats").visible is True


def test_reset_restores_defaults(logbook, parent):
    update_section(
        logbook_id=logbook.id, page_type="home", section_key="hero",
        patch={"visible": False, "fields": {"title": "Custom"}}, caller_id=parent.id,
    )

    section = reset_section(
        logbook_id=logbook.id, page_type="home", section_key="hero", caller_id=parent.id,
    )

    assert section.visible is True
    assert section.fields["title"] == "Welcome to Our Journey"
    assert SectionOverride.query.count() == 1


def test_reset_requires_parent(logbook, family_user):
    with pytest.raises(PermissionDenied):
        reset_section(
            logbook_id=logbook.id, page_type="home", section_key="hero",
            caller_id=family_user.id,
        )
