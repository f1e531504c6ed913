# family_logbook/domain/sections/registry.py
"""
Static catalog of page types and their default sections.

Every section carries a default visibility and a typed field schema
(field name -> FieldSpec). The catalog is built once at import time and
never mutated; callers that need mutable defaults use
``SectionDefinition.default_fields()`` which returns a fresh copy.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from family_logbook.domain.exceptions import NotFoundError

SCHEMA_VERSION = 1

FIELD_TYPES = {"string", "boolean", "number", "list", "object"}

PAGE_TYPES: Tuple[str, ...] = ("home", "help", "gallery", "vault", "faq")


@dataclass(frozen=True)
class FieldSpec:
    type: str
    default: Any
    nullable: bool = False

    def accepts(self, value: Any) -> bool:
        if value is None:
            return self.nullable

        if self.type == "string":
            return isinstance(value, str)
        if self.type == "boolean":
            return isinstance(value, bool)
        if self.type == "number":
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self.type == "list":
            return isinstance(value, list)
        if self.type == "object":
            return isinstance(value, dict)
        return False


@dataclass(frozen=True)
class SectionDefinition:
    key: str
    visible: bool
    fields: Mapping[str, FieldSpec]

    def default_fields(self) -> Dict[str, Any]:
        return {
            name: copy.deepcopy(spec.default)
            for name, spec in self.fields.items()
        }


# ------------------------
# Field constructors
# ------------------------
def text(default: str = "") -> FieldSpec:
    return FieldSpec("string", default)


def optional_text() -> FieldSpec:
    return FieldSpec("string", None, nullable=True)


def flag(default: bool) -> FieldSpec:
    return FieldSpec("boolean", default)


def number(default: float) -> FieldSpec:
    return FieldSpec("number", default)


def items(*default: Any) -> FieldSpec:
    return FieldSpec("list", list(default))


def section(key: str, *, visible: bool = True, **fields: FieldSpec) -> SectionDefinition:
    for name, spec in fields.items():
        if spec.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type for {key}.{name}: {spec.type}")
    return SectionDefinition(key=key, visible=visible, fields=MappingProxyType(dict(fields)))


# ------------------------
# Default catalog (declared order is render order)
# ------------------------
DEFAULT_SECTIONS: Mapping[str, Tuple[SectionDefinition, ...]] = MappingProxyType({
    "home": (
        section(
            "hero",
            imageUrl=optional_text(),
            title=text("Welcome to Our Journey"),
            subtitle=text("Following our adventure"),
            showDueDate=flag(True),
        ),
        section(
            "navigation",
            cards=items("gallery", "help", "vault", "faq", "admin"),
        ),
        section(
            "stats",
            visible=False,
            showPhotoCount=flag(True),
            showCommentCount=flag(True),
            showMemberCount=flag(True),
        ),
    ),
    "help": (
        section("registry", title=text("Our Registry"), links=items()),
        section(
            "plan529",
            visible=False,
            title=text("529 College Savings Plan"),
            description=text(),
            accountInfo=text(),
        ),
        section("counters", title=text("What We're Collecting"), items=items()),
        section(
            "giftIdeas",
            title=text("Gift Ideas"),
            description=text("Things we'd love help with"),
        ),
        section(
            "giftsForParents",
            visible=False,
            title=text("For the Parents"),
            description=text("Ways to support us directly"),
        ),
        section("whatWeNeed", items=items()),
        section("whatWeDontNeed", items=items()),
    ),
    "gallery": (
        section(
            "header",
            title=text("Our Gallery"),
            subtitle=text("Capturing every moment"),
        ),
        section("layout", style=text("grid"), columns=number(3)),
        section(
            "filters",
            showDateFilter=flag(True),
            showTypeFilter=flag(True),
        ),
    ),
    "vault": (
        section(
            "header",
            title=text("Memory Vault"),
            description=text("Letters and memories for the future"),
        ),
        section("letters", allowAnonymous=flag(False)),
        section("photos"),
        section(
            "recommendations",
            categories=items("restaurants", "books", "movies", "places"),
        ),
    ),
    "faq": (
        section("hospital", title=text("Hospital Information"), items=items()),
        section("visitation", title=text("Visitation Guidelines"), items=items()),
        section("parenting", title=text("Our Parenting Choices"), items=items()),
        section("general", visible=False, title=text("General Questions"), items=items()),
    ),
})


def assert_page_type(page_type: str) -> str:
    if page_type not in DEFAULT_SECTIONS:
        raise NotFoundError(f"Unknown page type: {page_type}")
    return page_type


def get_default_sections(page_type: str) -> Tuple[SectionDefinition, ...]:
    """Default sections for a page type, in declared order."""
    return DEFAULT_SECTIONS[assert_page_type(page_type)]


def get_section_definition(page_type: str, section_key: str) -> SectionDefinition:
    for definition in get_default_sections(page_type):
        if definition.key == section_key:
            return definition

    raise NotFoundError(f"Unknown section '{section_key}' on page '{page_type}'")
