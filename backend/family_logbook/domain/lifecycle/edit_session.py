from typing import Dict, Optional, Tuple

from family_logbook.domain.exceptions import PermissionDenied, ValidationError

VIEWING = "viewing"
EDITING = "editing"
EDITING_PANEL_OPEN = "editing+panelOpen"

# Explicit allowed transitions: event -> {from_state: to_state}
ALLOWED_EDIT_TRANSITIONS: Dict[str, Dict[str, str]] = {
    "enter_edit": {VIEWING: EDITING},
    "toggle_panel": {EDITING: EDITING_PANEL_OPEN, EDITING_PANEL_OPEN: EDITING},
    "exit_edit": {EDITING: VIEWING, EDITING_PANEL_OPEN: VIEWING},
}


class EditSession:
    """
    Transient edit-mode state for one page visit.

    Passed explicitly to whatever renders the page. Nothing here is
    persisted; a new session always starts in ``viewing``.
    """

    def __init__(self, role: Optional[str]):
        self.role = role
        self.state = VIEWING

    @property
    def can_enter_edit(self) -> bool:
        return self.role == "parent"

    @property
    def is_edit_mode(self) -> bool:
        return self.state != VIEWING

    @property
    def is_panel_open(self) -> bool:
        return self.state == EDITING_PANEL_OPEN

    @property
    def controls(self) -> Tuple[str, ...]:
        """Events the renderer may offer right now. Empty for non-parents."""
        if not self.can_enter_edit:
            return ()
        return tuple(
            event
            for event, transitions in ALLOWED_EDIT_TRANSITIONS.items()
            if self.state in transitions
        )

    def can_edit(self, path: Optional[str] = None) -> bool:
        return self.can_enter_edit and self.is_edit_mode

    def enter_edit(self) -> str:
        if not self.can_enter_edit:
            raise PermissionDenied("Only parents can edit page content")
        return self._transition("enter_edit")

    def toggle_panel(self) -> str:
        return self._transition("toggle_panel")

    def exit_edit(self) -> str:
        return self._transition("exit_edit")

    def _transition(self, event: str) -> str:
        target = ALLOWED_EDIT_TRANSITIONS[event].get(self.state)
        if target is None:
            raise ValidationError(
                f"Illegal edit session transition: {event} from {self.state}"
            )
        self.state = target
        return self.state
