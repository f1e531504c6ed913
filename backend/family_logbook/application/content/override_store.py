# family_logbook/application/content/override_store.py
"""
Persistence for section overrides.

One row per (logbook_id, page_type, section_key). Writes merge the patch
into the existing row: keys absent from the patch are left untouched,
so two writers touching disjoint fields never clobber each other. Two
writers touching the same field resolve last-write-wins.
"""
from typing import Any, Dict, List, Optional
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from family_logbook.extensions import db
from family_logbook.models.logbook import Logbook
from family_logbook.models.section_override import SectionOverride
from family_logbook.domain.exceptions import NotFoundError, PersistenceError
from family_logbook.utils.audit import log_action
from family_logbook.utils.transaction import transactional

UPSERT_ATTEMPTS = 2


def _locked_override(logbook_id: str, page_type: str, section_key: str) -> Optional[SectionOverride]:
    return db.session.execute(
        select(SectionOverride)
        .where(
            SectionOverride.logbook_id == logbook_id,
            SectionOverride.page_type == page_type,
            SectionOverride.section_key == section_key,
        )
        .with_for_update()
    ).scalar_one_or_none()


def _apply_patch(override: SectionOverride, patch: Dict[str, Any]) -> List[str]:
    changed: List[str] = []

    if "visible" in patch:
        override.visible = patch["visible"]
        changed.append("visible")

    fields = patch.get("fields") or {}
    if fields:
        # Reassign so the JSON column is flagged dirty
        override.fields = {**(override.fields or {}), **fields}
        changed.extend(f"fields.{name}" for name in fields)

    return changed


def get_overrides(*, logbook_id: str, page_type: str) -> List[SectionOverride]:
    """All overrides for one page of one logbook. Empty list when none exist."""
    try:
        return (
            SectionOverride.query
            .filter_by(logbook_id=logbook_id, page_type=page_type)
            .all()
        )
    except SQLAlchemyError as exc:
        current_app.logger.exception("Failed to load overrides for %s/%s", logbook_id, page_type)
        raise PersistenceError("Failed to load page sections") from exc


def upsert_override(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    patch: Dict[str, Any],
    actor_id: Optional[str] = None,
) -> SectionOverride:
    """
    Create or merge-update the override for one section.

    A concurrent first insert for the same composite key surfaces as an
    IntegrityError on the unique constraint; the second attempt then finds
    the row and updates it.
    """
    for attempt in range(1, UPSERT_ATTEMPTS + 1):
        try:
            if db.session.get(Logbook, logbook_id) is None:
                raise NotFoundError("Logbook not found")

            with transactional():
                override = _locked_override(logbook_id, page_type, section_key)
                if override is None:
                    override = SectionOverride()
                    override.logbook_id = logbook_id
                    override.page_type = page_type
                    override.section_key = section_key
                    override.fields = {}
                    db.session.add(override)

                changed = _apply_patch(override, patch)
                override.updated_by = actor_id
                db.session.flush()

                log_action(
                    action="section.override",
                    entity_type="section",
                    entity_id=override.id,
                    logbook_id=logbook_id,
                    actor_id=actor_id,
                    payload={
                        "page_type": page_type,
                        "section_key": section_key,
                        "changed": changed,
                    },
                )

            return override

        except IntegrityError as exc:
            if attempt == UPSERT_ATTEMPTS:
                current_app.logger.exception("Override upsert kept conflicting for %s/%s/%s", logbook_id, page_type, section_key)
                raise PersistenceError("Failed to save section, please try again") from exc
            current_app.logger.info("Concurrent insert on %s/%s/%s, retrying as update", logbook_id, page_type, section_key)

        except SQLAlchemyError as exc:
            current_app.logger.exception("Failed to save override for %s/%s/%s", logbook_id, page_type, section_key)
            raise PersistenceError("Failed to save section, please try again") from exc

    raise PersistenceError("Failed to save section, please try again")


def clear_override(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    actor_id: Optional[str] = None,
) -> Optional[SectionOverride]:
    """
    Restore defaults for one section. The row is kept with visible=None and
    no fields; returns None when the section was never overridden.
    """
    try:
        if db.session.get(Logbook, logbook_id) is None:
            raise NotFoundError("Logbook not found")

        with transactional():
            override = _locked_override(logbook_id, page_type, section_key)
            if override is None:
                return None

            override.visible = None
            override.fields = {}
            override.updated_by = actor_id

            log_action(
                action="section.reset",
                entity_type="section",
                entity_id=override.id,
                logbook_id=logbook_id,
                actor_id=actor_id,
                payload={"page_type": page_type, "section_key": section_key},
            )

        return override

    except SQLAlchemyError as exc:
        current_app.logger.exception("Failed to reset override for %s/%s/%s", logbook_id, page_type, section_key)
        raise PersistenceError("Failed to reset section, please try again") from exc
