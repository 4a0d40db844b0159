"""Tests for form definition models"""

from datetime import datetime, timezone

from formbuilder.models import FieldMutations, FieldSchema, FormDefinition


def _wire_form():
    return {
        "id": "abc",
        "name": "Survey",
        "description": "Quarterly",
        "schema": {
            "type": "object",
            "properties": {
                "q1": {"title": "Name", "type": "string"},
                "q2": {"title": "Colour", "type": "string", "enum": ["Red", "Blue"], "x-custom": 1},
            },
            "required": ["q1", "q1", "gone"],
        },
        "uiSchema": {"q2": {"ui:widget": "radio"}, "orphan": {"ui:widget": "file"}},
        "formData": {"q1": "Jane"},
    }


def test_load_wire_format():
    definition = FormDefinition.model_validate(_wire_form())

    assert definition.id == "abc"
    assert list(definition.properties) == ["q1", "q2"]
    assert definition.ui_schema["q2"] == {"ui:widget": "radio"}
    assert definition.form_data == {"q1": "Jane"}


def test_required_drops_dangling_and_duplicate_keys():
    definition = FormDefinition.model_validate(_wire_form())
    assert definition.required == ["q1"]
    assert definition.is_required("q1")
    assert not definition.is_required("q2")


def test_orphan_hints_survive():
    definition = FormDefinition.model_validate(_wire_form())
    assert "orphan" in definition.ui_schema


def test_unknown_fragment_keys_round_trip():
    definition = FormDefinition.model_validate(_wire_form())
    data = definition.to_dict()
    assert data["schema"]["properties"]["q2"]["x-custom"] == 1


def test_to_dict_uses_aliases_and_drops_nulls():
    data = FormDefinition.model_validate(_wire_form()).to_dict()

    assert set(data) == {"id", "name", "description", "schema", "uiSchema", "formData"}
    assert data["schema"]["properties"]["q1"] == {"title": "Name", "type": "string"}


def test_populate_by_name_and_null_values():
    definition = FormDefinition(name="A", form_schema={"properties": {}}, description=None)
    assert definition.description == ""
    assert definition.form_schema.type == "object"

    loaded = FormDefinition.model_validate({"name": "B", "uiSchema": None, "id": None})
    assert loaded.ui_schema == {}
    assert loaded.id is None


def test_updated_at_serialized():
    definition = FormDefinition(updated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    assert definition.to_dict()["updated_at"].startswith("2026-01-02T03:04:05")


def test_field_schema_nested_items():
    fragment = FieldSchema.model_validate({"type": "array", "items": {"type": "string", "enum": ["a"]}})
    assert isinstance(fragment.items, FieldSchema)
    assert fragment.to_dict() == {"type": "array", "items": {"type": "string", "enum": ["a"]}}


def test_field_mutations_track_provided_fields():
    mutations = FieldMutations.model_validate({"title": "x", "bogus": 1})
    assert mutations.model_fields_set == {"title"}
