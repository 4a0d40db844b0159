"""Tests for default fragments and key generation"""

import pytest

from formbuilder.enums import FieldType
from formbuilder.errors import UnknownFieldType
from formbuilder.synthesizer import KeyGenerator, generate_key, synthesize


class TestSynthesize:
    def test_email(self):
        fragment, hint = synthesize(FieldType.EMAIL)
        assert fragment.to_dict() == {
            "title": "New Email",
            "description": "",
            "type": "string",
            "format": "email",
            "placeholder": "Enter email...",
        }
        assert hint == {}

    def test_textarea_hint_carries_rows(self):
        fragment, hint = synthesize("textarea")
        assert fragment.multiline is True
        assert hint == {"ui:widget": "textarea", "ui:options": {"rows": 4}}

    def test_checkbox_options_live_under_items(self):
        fragment, hint = synthesize(FieldType.CHECKBOX)
        assert fragment.type == "array"
        assert fragment.enum is None
        assert fragment.items.enum == ["Option 1", "Option 2", "Option 3"]
        assert hint == {"ui:widget": "checkboxes"}

    def test_rating(self):
        fragment, hint = synthesize(FieldType.RATING)
        assert (fragment.type, fragment.minimum, fragment.maximum) == ("number", 1, 5)
        assert hint == {"ui:widget": "range"}

    def test_signature_title_identifies_type(self):
        fragment, _ = synthesize(FieldType.SIGNATURE)
        assert fragment.title == "New Signature"
        assert fragment.format == "data-url"

    def test_layout_types(self):
        section, _ = synthesize(FieldType.SECTION)
        divider, _ = synthesize(FieldType.DIVIDER)
        html, hint = synthesize(FieldType.HTML)

        assert (section.type, section.title) == ("null", "Section Header")
        assert (divider.type, divider.title) == ("null", "Divider")
        assert html.type == "null"
        assert html.content == "<p>Custom HTML content</p>"
        assert hint == {"ui:widget": "html"}

    def test_results_are_independent(self):
        first, first_hint = synthesize(FieldType.SELECT)
        first.enum.append("Extra")
        first_hint["ui:widget"] = "radio"

        second, second_hint = synthesize(FieldType.SELECT)
        assert second.enum == ["Option 1", "Option 2", "Option 3"]
        assert second_hint == {}

    def test_unknown_type(self):
        with pytest.raises(UnknownFieldType):
            synthesize("colour-picker")


class TestKeyGenerator:
    def test_key_uses_milliseconds(self):
        generator = KeyGenerator(clock=lambda: 1700000000)
        assert generator.generate() == "field_1700000000000"

    def test_same_millisecond_tie_break(self):
        generator = KeyGenerator(clock=lambda: 1700000000)
        keys = [generator.generate() for _ in range(3)]
        assert keys == [
            "field_1700000000000",
            "field_1700000000000_1",
            "field_1700000000000_2",
        ]

    def test_skips_existing_keys(self):
        generator = KeyGenerator(clock=lambda: 1700000000)
        existing = {"field_1700000000000", "field_1700000000000_1"}
        assert generator.generate(existing) == "field_1700000000000_2"

    def test_counter_resets_when_clock_moves(self):
        ticks = iter([1, 1, 2])
        generator = KeyGenerator(clock=lambda: next(ticks))
        assert generator.generate() == "field_1000"
        assert generator.generate() == "field_1000_1"
        assert generator.generate() == "field_2000"

    def test_custom_prefix(self):
        generator = KeyGenerator(clock=lambda: 3, prefix="q_")
        assert generator.generate() == "q_3000"

    def test_generate_key_is_unique(self):
        keys = set()
        for _ in range(50):
            keys.add(generate_key(keys))
        assert len(keys) == 50
