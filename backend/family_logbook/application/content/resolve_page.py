from typing import List
from flask import current_app
from family_logbook.extensions import page_cache
from family_logbook.domain.exceptions import NotFoundError
from family_logbook.domain.sections.registry import get_default_sections
from family_logbook.domain.sections.merge import EffectiveSection, merge_sections, find_section
from .override_store import get_overrides


def resolve(page_type: str, logbook_id: str) -> List[EffectiveSection]:
    """
    Defaults merged with this logbook's overrides, in registry order.

    No authorization happens here; callers establish read access first.
    """
    definitions = get_default_sections(page_type)
    overrides = get_overrides(logbook_id=logbook_id, page_type=page_type)
    return merge_sections(definitions, overrides)


def resolve_cached(page_type: str, logbook_id: str) -> List[EffectiveSection]:
    """Same as ``resolve``; served from ``page_cache`` when PAGE_CACHE_ENABLED is set."""
    if not current_app.config.get("PAGE_CACHE_ENABLED"):
        return resolve(page_type, logbook_id)

    sections = page_cache.get(logbook_id, page_type)
    if sections is not None:
        return sections

    # Taken before the query so a write landing in between voids the fill
    generation = page_cache.generation(logbook_id, page_type)
    sections = resolve(page_type, logbook_id)
    if not page_cache.set(logbook_id, page_type, sections, generation=generation):
        current_app.logger.debug("Discarded stale page fill for %s/%s", logbook_id, page_type)
    return sections


def resolve_section(page_type: str, logbook_id: str, section_key: str) -> EffectiveSection:
    section = find_section(resolve(page_type, logbook_id), section_key)
    if section is None:
        raise NotFoundError(f"Unknown section '{section_key}' on page '{page_type}'")
    return section
