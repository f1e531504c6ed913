from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .registry import SectionDefinition


@dataclass(frozen=True)
class EffectiveSection:
    key: str
    visible: bool
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "visible": self.visible,
            "fields": copy.deepcopy(self.fields),
        }


def merge_section(definition: SectionDefinition, override=None) -> EffectiveSection:
    """
    visible = override.visible ?? default.visible
    fields  = shallow merge of override.fields onto the defaults
    """
    fields = definition.default_fields()
    visible = definition.visible

    if override is not None:
        if override.visible is not None:
            visible = override.visible
        for name, value in (override.fields or {}).items():
            fields[name] = copy.deepcopy(value)

    return EffectiveSection(key=definition.key, visible=visible, fields=fields)


def merge_sections(
    definitions: Iterable[SectionDefinition],
    overrides: Iterable[Any],
) -> List[EffectiveSection]:
    """
    Output follows the order of ``definitions``. Overrides whose
    section_key is not defined any more are dropped.
    """
    by_key: Dict[str, Any] = {o.section_key: o for o in overrides}

    return [
        merge_section(definition, by_key.get(definition.key))
        for definition in definitions
    ]


def find_section(sections: Iterable[EffectiveSection], key: str) -> Optional[EffectiveSection]:
    return next((s for s in sections if s.key == key), None)
