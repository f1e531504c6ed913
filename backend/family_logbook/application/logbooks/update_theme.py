from flask import current_app
from family_logbook.models.logbook import Logbook, THEMES
from family_logbook.domain.exceptions import ValidationError
from family_logbook.utils.audit import log_action
from family_logbook.utils.transaction import transactional
from .members import get_logbook, require_parent


def update_logbook_theme(
    *,
    logbook_id: str,
    actor_id: str,
    theme: str,
) -> Logbook:
    if theme not in THEMES:
        raise ValidationError("Invalid theme selection")

    require_parent(logbook_id=logbook_id, user_id=actor_id)
    logbook = get_logbook(logbook_id)

    if logbook.theme == theme:
        return logbook

    with transactional():
        previous = logbook.theme
        logbook.theme = theme

        log_action(
            action="logbook.theme",
            entity_type="logbook",
            entity_id=logbook.id,
            logbook_id=logbook.id,
            actor_id=actor_id,
            payload={"from": previous, "to": theme},
        )

    current_app.logger.info("Logbook %s theme -> %s", logbook.slug, theme)
    return logbook
