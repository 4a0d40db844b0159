"""Tests for the form builder session"""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from formbuilder.builder import FormBuilder, FormSession, HtmlContainer
from formbuilder.config import BuilderOptions
from formbuilder.enums import FieldType
from formbuilder.errors import CollisionError, FormNotFound
from formbuilder.models import FormDefinition
from formbuilder.synthesizer import KeyGenerator


@pytest.fixture
def container():
    return HtmlContainer()


@pytest.fixture
def callbacks():
    return {
        "on_save": Mock(),
        "on_preview": Mock(),
        "on_field_add": Mock(),
        "on_field_remove": Mock(),
    }


@pytest.fixture
def builder(container, callbacks):
    return FormBuilder(
        container,
        callbacks,
        key_generator=KeyGenerator(clock=lambda: 1700000000),
    )


def test_options_reject_unknown_keys():
    with pytest.raises(ValidationError):
        FormBuilder(options={"on_submit": print})


def test_default_options_are_noops():
    builder = FormBuilder()
    key = builder.add_field(FieldType.TEXT)
    builder.delete_field(key)
    builder.save()
    assert builder.options == BuilderOptions()


def test_add_field_redraws_then_calls_back(builder, container, callbacks):
    order = []
    container.mount = Mock(side_effect=lambda html: order.append("mount"))
    callbacks["on_field_add"].side_effect = lambda key, fragment: order.append("add")

    key = builder.add_field(FieldType.EMAIL)

    assert order == ["mount", "add"]
    called_key, fragment = callbacks["on_field_add"].call_args.args
    assert called_key == key
    assert fragment.format == "email"


def test_every_mutation_redraws(builder, container):
    key = builder.add_field(FieldType.TEXT)
    builder.edit_field(key, {"title": "Name"})
    copy_key = builder.duplicate_field(key)
    builder.delete_field(copy_key)

    assert container.redraws == 4
    assert "Name (Copy)" not in container.html
    assert "Name" in container.html


def test_noop_mutations_do_not_redraw(builder, container, callbacks):
    builder.edit_field("missing", {"title": "x"})
    assert builder.duplicate_field("missing") is None
    builder.delete_field("missing")

    assert container.redraws == 0
    callbacks["on_field_remove"].assert_not_called()


def test_delete_calls_back(builder, callbacks):
    key = builder.add_field(FieldType.TEXT)
    builder.delete_field(key)
    callbacks["on_field_remove"].assert_called_once_with(key)


def test_deleting_orphan_hint_does_not_call_back(builder, container, callbacks):
    builder.definition.ui_schema["orphan"] = {"ui:widget": "radio"}

    builder.delete_field("orphan")

    assert "orphan" not in builder.definition.ui_schema
    assert container.redraws == 1
    callbacks["on_field_remove"].assert_not_called()


def test_collision_propagates(builder, callbacks):
    builder.add_field(FieldType.TEXT, "name")
    with pytest.raises(CollisionError):
        builder.add_field(FieldType.TEXT, "name")
    assert callbacks["on_field_add"].call_count == 1


def test_load_and_clear(builder, container):
    definition = builder.load_form(
        {
            "id": "f1",
            "name": "Loaded",
            "schema": {"properties": {"q": {"type": "string", "enum": ["a"]}}},
            "uiSchema": {"q": {"ui:widget": "radio"}},
        }
    )

    assert definition.id == "f1"
    assert builder.infer_field_type("q") == FieldType.RADIO
    assert 'value="Loaded"' in container.html

    builder.clear_form()
    assert builder.definition.properties == {}
    assert builder.infer_field_type("q") is None
    assert container.redraws == 2


def test_get_form_data_is_a_copy(builder):
    key = builder.add_field(FieldType.TEXT)
    data = builder.get_form_data()
    data.properties[key].title = "changed"
    assert builder.definition.properties[key].title == "New Text Input"


def test_save_stamps_and_hands_snapshot(builder, callbacks):
    builder.set_info(name="", description="Anonymous")
    builder.add_field(FieldType.TEXT)

    saved = builder.save()

    callbacks["on_save"].assert_called_once_with(saved)
    assert saved.updated_at is not None
    assert saved.name == ""
    assert saved is not builder.definition


def test_preview_returns_live_html(builder, callbacks):
    key = builder.add_field(FieldType.TEXT)
    builder.edit_field(key, {"required": True})

    html = builder.preview()

    assert "<form" in html
    assert " required>" in html
    callbacks["on_preview"].assert_called_once()


def test_render_honours_options(container):
    builder = FormBuilder(container, BuilderOptions(show_preview=False, allow_advanced=False))
    html = builder.render()
    assert "form-preview-pane" not in html
    assert 'data-field-type="signature"' not in html


def test_builder_without_container(callbacks):
    builder = FormBuilder(options=callbacks)
    builder.add_field(FieldType.TEXT)
    callbacks["on_field_add"].assert_called_once()


class TestFormSession:
    def test_commit_saves_through_storage(self):
        storage = Mock()
        storage.save.side_effect = lambda definition: definition.model_copy(update={"id": "new"})

        session = FormSession(storage)
        session.builder.set_info(name="Signup")
        saved = session.commit()

        assert saved.id == "new"
        assert saved.name == "Signup"
        storage.load.assert_not_called()

    def test_loads_existing_form(self):
        storage = Mock()
        storage.load.return_value = FormDefinition(id="f1", name="Existing")

        session = FormSession(storage, BuilderOptions(allow_advanced=False), "f1")

        storage.load.assert_called_once_with("f1")
        assert session.builder.definition.name == "Existing"
        assert session.builder.options.allow_advanced is False

    def test_missing_form(self):
        storage = Mock()
        storage.load.side_effect = FormNotFound("nope")
        with pytest.raises(FormNotFound):
            FormSession(storage, form_id="nope")
