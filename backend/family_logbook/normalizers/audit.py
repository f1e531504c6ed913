# family_logbook/normalizers/audit.py
from typing import Any, Dict
from family_logbook.models.audit_log import AuditLog


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    Audit rows as returned by GET /logbooks/<slug>/audit.

    Section writes carry page_type and section_key in the payload; they
    are lifted to the top level so clients can group by section.
    """
    payload = dict(log.payload or {})

    data = {
        "id": log.id,
        "action": log.action,
        "actor_id": log.actor_id,
        "entity_type": log.entity_type,
        "entity_id": log.entity_id,
        "payload": payload,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }

    if log.entity_type == "section":
        data["page_type"] = payload.get("page_type")
        data["section_key"] = payload.get("section_key")

    return data
