from typing import Any, Dict

from family_logbook.domain.exceptions import ValidationError
from family_logbook.domain.sections.registry import SectionDefinition

ALLOWED_PATCH_KEYS = {"visible", "fields"}


def assert_section_patch(definition: SectionDefinition, patch: Dict[str, Any]) -> None:
    """
    Validates an override patch against the section's field schema.

    - patch must touch at least one of visible / fields
    - visible must be a boolean
    - every field must be declared and carry a value of the declared type
    """
    if not isinstance(patch, dict):
        raise ValidationError("Section patch must be an object")

    unknown_keys = set(patch) - ALLOWED_PATCH_KEYS
    if unknown_keys:
        raise ValidationError(f"Unknown patch keys: {sorted(unknown_keys)}")

    if "visible" not in patch and not patch.get("fields"):
        raise ValidationError("Patch must set visibility or at least one field")

    if "visible" in patch and not isinstance(patch["visible"], bool):
        raise ValidationError("visible must be a boolean")

    fields = patch.get("fields") or {}
    if not isinstance(fields, dict):
        raise ValidationError("fields must be an object")

    for name, value in fields.items():
        spec = definition.fields.get(name)
        if spec is None:
            raise ValidationError(
                f"Unknown field '{name}' for section '{definition.key}'"
            )
        if not spec.accepts(value):
            raise ValidationError(
                f"Field '{definition.key}.{name}' expects {spec.type}, "
                f"got {type(value).__name__}"
            )
