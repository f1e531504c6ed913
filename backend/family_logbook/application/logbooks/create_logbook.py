from typing import Any, Dict
from dateutil.parser import isoparse
from flask import current_app
from sqlalchemy.exc import IntegrityError
from family_logbook.extensions import db
from family_logbook.models.logbook import Logbook, THEMES
from family_logbook.models.logbook_member import LogbookMember
from family_logbook.domain.exceptions import ValidationError, ConflictError
from family_logbook.utils.audit import log_action
from family_logbook.utils.slug import slugify, is_valid_slug, random_suffix
from family_logbook.utils.transaction import transactional


# Static path segments under /logbooks/
RESERVED_SLUGS = frozenset({"slug-available"})


def _slug_taken(slug: str) -> bool:
    if slug in RESERVED_SLUGS:
        return True
    return Logbook.query.filter_by(slug=slug).first() is not None


def check_slug_availability(slug) -> Dict[str, Any]:
    """Used by the create form before submit. Malformed slugs are never available."""
    if not isinstance(slug, str) or not is_valid_slug(slug):
        return {"slug": slug, "available": False, "valid": False}
    return {"slug": slug, "available": not _slug_taken(slug), "valid": True}


def create_logbook(
    *,
    actor_id: str,
    data: Dict[str, Any],
) -> Logbook:
    """
    Create a logbook and make the creator its first parent.

    Edge cases handled:
    - Missing name
    - Explicit slug that is malformed or already taken
    - Derived slug collision (random suffix appended)
    - Unparseable due date
    """
    for key in ("name", "slug", "baby_name", "theme", "due_date"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValidationError(f"{key} must be a string")

    name: str | None = (data.get("name") or "").strip() or None
    if not name:
        raise ValidationError("Logbook name is required")

    slug = data.get("slug")
    if slug:
        if not is_valid_slug(slug):
            raise ValidationError("Slug may only contain lowercase letters, digits and hyphens")
        if _slug_taken(slug):
            raise ConflictError(f"Logbook URL '{slug}' is already taken")
    else:
        slug = slugify(name)
        if not is_valid_slug(slug):
            slug = "logbook"
        if _slug_taken(slug):
            slug = f"{slug}-{random_suffix()}"

    theme = data.get("theme", "forest-light")
    if theme not in THEMES:
        raise ValidationError("Invalid theme selection")

    due_date = None
    if data.get("due_date"):
        try:
            due_date = isoparse(data["due_date"]).date()
        except (TypeError, ValueError) as exc:
            raise ValidationError("due_date must be an ISO 8601 date") from exc

    logbook = Logbook()
    logbook.name = name
    logbook.slug = slug
    logbook.baby_name = data.get("baby_name")
    logbook.due_date = due_date
    logbook.theme = theme
    logbook.created_by = actor_id

    try:
        with transactional():
            db.session.add(logbook)
            db.session.flush()  # ensures logbook.id is available

            membership = LogbookMember()
            membership.logbook_id = logbook.id
            membership.user_id = actor_id
            membership.role = "parent"
            db.session.add(membership)

            log_action(
                action="logbook.create",
                entity_type="logbook",
                entity_id=logbook.id,
                logbook_id=logbook.id,
                actor_id=actor_id,
                payload={"name": logbook.name, "slug": logbook.slug},
            )

    except IntegrityError as exc:
        # Two creators raced for the same slug
        raise ConflictError(f"Logbook URL '{slug}' is already taken") from exc

    current_app.logger.info("Logbook %s created by %s", logbook.slug, actor_id)
    return logbook
