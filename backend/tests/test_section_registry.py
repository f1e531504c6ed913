import pytest

from family_logbook.domain.exceptions import NotFoundError
from family_logbook.domain.sections.registry import (
    PAGE_TYPES,
    DEFAULT_SECTIONS,
    FieldSpec,
    get_default_sections,
    get_section_definition,
)


def test_every_page_type_has_sections():
    assert set(PAGE_TYPES) == set(DEFAULT_SECTIONS)
    for page_type in PAGE_TYPES:
        assert get_default_sections(page_type)


def test_home_sections_in_declared_order():
    keys = [d.key for d in get_default_sections("home")]
    assert keys == ["hero", "navigation", "stats"]


def test_same_value_across_calls():
    assert get_default_sections("faq") is get_default_sections("faq")


def test_default_fields_returns_fresh_copies():
    navigation = get_section_definition("home", "navigation")

    cards = navigation.default_fields()["cards"]
    cards.append("mutated")

    assert navigation.default_fields()["cards"] == ["gallery", "help", "vault", "faq", "admin"]


def test_hidden_by_default_sections():
    assert get_section_definition("home", "stats").visible is False
    assert get_section_definition("help", "plan529").visible is False
    assert get_section_definition("faq", "general").visible is False


def test_unknown_page_type():
    with pytest.raises(NotFoundError):
        get_default_sections("billing")


def test_unknown_section_key():
    with pytest.raises(NotFoundError):
        get_section_definition("home", "footer")


@pytest.mark.parametrize(
    "spec, value, accepted",
    [
        (FieldSpec("string", ""), "hello", True),
        (FieldSpec("string", ""), 3, False),
        (FieldSpec("string", None, nullable=True), None, True),
        (FieldSpec("string", ""), None, False),
        (FieldSpec("boolean", True), False, True),
        (FieldSpec("boolean", True), "false", False),
        (FieldSpec("number", 3), 4.5, True),
        (FieldSpec("number", 3), True, False),
        (FieldSpec("list", []), ["a"], True),
        (FieldSpec("list", []), ("a",), False),
        (FieldSpec("object", {}), {"a": 1}, True),
    ],
)
def test_field_spec_type_check(spec, value, accepted):
    assert spec.accepts(value) is accepted
