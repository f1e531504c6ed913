# family_logbook/application/content/update_section.py
from typing import Any, Dict
from flask import current_app
from family_logbook.extensions import page_cache
from family_logbook.domain.invariants.section import assert_section_patch
from family_logbook.domain.sections.merge import EffectiveSection
from family_logbook.domain.sections.registry import assert_page_type, get_section_definition
from family_logbook.application.logbooks.members import require_parent
from .override_store import upsert_override, clear_override
from .resolve_page import resolve_section


def update_section(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    patch: Dict[str, Any],
    caller_id: str,
) -> EffectiveSection:
    """
    Apply a visibility and/or field patch to one section.

    Responsibilities:
    - parent-role check (nothing is written for other roles)
    - patch validation against the section's field schema
    - merge-upsert of the override
    - cache invalidation for the page
    - returns the re-resolved section
    """
    assert_page_type(page_type)
    require_parent(logbook_id=logbook_id, user_id=caller_id)

    definition = get_section_definition(page_type, section_key)
    assert_section_patch(definition, patch)

    upsert_override(
        logbook_id=logbook_id,
        page_type=page_type,
        section_key=section_key,
        patch=patch,
        actor_id=caller_id,
    )
    page_cache.invalidate(logbook_id, page_type)

    current_app.logger.info(
        "Section %s/%s updated in logbook %s by %s",
        page_type, section_key, logbook_id, caller_id,
    )
    return resolve_section(page_type, logbook_id, section_key)


def set_section_visibility(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    visible: bool,
    caller_id: str,
) -> EffectiveSection:
    # Type of visible is checked after the parent check, in assert_section_patch
    return update_section(
        logbook_id=logbook_id,
        page_type=page_type,
        section_key=section_key,
        patch={"visible": visible},
        caller_id=caller_id,
    )


def set_section_field(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    field_name: str,
    value: Any,
    caller_id: str,
) -> EffectiveSection:
    return update_section(
        logbook_id=logbook_id,
        page_type=page_type,
        section_key=section_key,
        patch={"fields": {field_name: value}},
        caller_id=caller_id,
    )


def reset_section(
    *,
    logbook_id: str,
    page_type: str,
    section_key: str,
    caller_id: str,
) -> EffectiveSection:
    assert_page_type(page_type)
    require_parent(logbook_id=logbook_id, user_id=caller_id)
    get_section_definition(page_type, section_key)

    clear_override(
        logbook_id=logbook_id,
        page_type=page_type,
        section_key=section_key,
        actor_id=caller_id,
    )
    page_cache.invalidate(logbook_id, page_type)

    current_app.logger.info(
        "Section %s/%s reset in logbook %s by %s",
        page_type, section_key, logbook_id, caller_id,
    )
    return resolve_section(page_type, logbook_id, section_key)
