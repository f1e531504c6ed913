from typing import Optional
from family_logbook.extensions import db
from family_logbook.models.audit_log import AuditLog

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    logbook_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    """Adds an audit row to the current session; committed with the caller's transaction."""
    log = AuditLog()

    log.logbook_id = logbook_id
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
