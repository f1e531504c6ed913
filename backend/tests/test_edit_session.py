import pytest

from family_logbook.domain.exceptions import PermissionDenied, ValidationError
from family_logbook.domain.lifecycle.edit_session import (
    EditSession,
    VIEWING,
    EDITING,
    EDITING_PANEL_OPEN,
)


def test_new_session_is_viewing():
    session = EditSession("parent")

    assert session.state == VIEWING
    assert session.is_edit_mode is False
    assert session.controls == ("enter_edit",)


def test_parent_full_cycle():
    session = EditSession("parent")

    assert session.enter_edit() == EDITING
    assert session.can_edit("hero.title") is True
    assert session.toggle_panel() == EDITING_PANEL_OPEN
    assert session.is_panel_open is True
    assert session.toggle_panel() == EDITING
    assert session.exit_edit() == VIEWING
    assert session.can_edit() is False


def test_exit_from_open_panel():
    session = EditSession("parent")
    session.enter_edit()
    session.toggle_panel()

    assert session.exit_edit() == VIEWING


@pytest.mark.parametrize("role", ["family", "friend", None])
def test_non_parent_never_edits(role):
    session = EditSession(role)

    assert session.controls == ()
    assert session.can_edit() is False
    with pytest.raises(PermissionDenied):
        session.enter_edit()
    assert session.state == VIEWING


def test_illegal_transitions():
    session = EditSession("parent")

    with pytest.raises(ValidationError):
        session.toggle_panel()
    with pytest.raises(ValidationError):
        session.exit_edit()

    session.enter_edit()
    with pytest.raises(ValidationError):
        session.enter_edit()
