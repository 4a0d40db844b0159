"""Form builder session: one definition, its container and its callbacks."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

from .config import BuilderOptions
from .enums import FieldType
from .inference import resolve_type
from .models import FieldMutations, FormDefinition
from .processor import FieldOperationProcessor
from .renderer import LiveRenderer, PreviewRenderer
from .synthesizer import KeyGenerator
from .utils import get_now

logger = logging.getLogger(__name__)


class Container(Protocol):
    def mount(self, html: str) -> None: ...


class HtmlContainer:
    """In-memory container that keeps the last markup mounted into it."""

    def __init__(self) -> None:
        self.html = ""
        self.redraws = 0

    def mount(self, html: str) -> None:
        self.html = html
        self.redraws += 1


class FormBuilder:
    """Editing session over a single form definition.

    Every mutation is followed by a full redraw of the container and then by
    the matching callback. The builder never persists anything itself: the
    host receives the definition through ``on_save`` and decides what to do.
    """

    def __init__(
        self,
        container: Optional[Container] = None,
        options: BuilderOptions | Mapping[str, Any] | None = None,
        *,
        key_generator: Optional[KeyGenerator] = None,
        preview_renderer: Optional[PreviewRenderer] = None,
        live_renderer: Optional[LiveRenderer] = None,
    ) -> None:
        if options is None:
            options = BuilderOptions()
        elif not isinstance(options, BuilderOptions):
            options = BuilderOptions.model_validate(dict(options))

        self.container = container
        self.options = options
        self.preview_renderer = preview_renderer or PreviewRenderer()
        self.live_renderer = live_renderer or LiveRenderer()
        self._key_generator = key_generator
        self._set_definition(FormDefinition())

    def _set_definition(self, definition: FormDefinition) -> None:
        self.definition = definition
        self.processor = FieldOperationProcessor(definition, self._key_generator)

    def render(self) -> str:
        return self.preview_renderer.render_canvas(
            self.definition,
            show_preview=self.options.show_preview,
            allow_advanced=self.options.allow_advanced,
        )

    def redraw(self) -> None:
        if self.container is None:
            return
        self.container.mount(self.render())

    def load_form(self, data: FormDefinition | Mapping[str, Any]) -> FormDefinition:
        if isinstance(data, FormDefinition):
            definition = data
        else:
            definition = FormDefinition.model_validate(dict(data))
        self._set_definition(definition)
        logger.info(
            f"Loaded form {definition.id} with {len(definition.form_schema.properties)} fields"
        )
        self.redraw()
        return definition

    def clear_form(self) -> None:
        self._set_definition(FormDefinition())
        self.redraw()

    def get_form_data(self) -> FormDefinition:
        return self.definition.model_copy(deep=True)

    def set_info(self, *, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None:
            self.definition.name = name
        if description is not None:
            self.definition.description = description

    def add_field(self, field_type: FieldType | str, key: Optional[str] = None) -> str:
        key = self.processor.add(field_type, key)
        self.redraw()
        self.options.on_field_add(key, self.definition.form_schema.properties[key])
        return key

    def edit_field(self, key: str, mutations: Mapping[str, Any] | FieldMutations) -> None:
        if key not in self.definition.form_schema.properties:
            return
        self.processor.edit(key, mutations)
        self.redraw()

    def duplicate_field(self, key: str) -> Optional[str]:
        new_key = self.processor.duplicate(key)
        if new_key is not None:
            self.redraw()
        return new_key

    def delete_field(self, key: str) -> None:
        had_property = key in self.definition.form_schema.properties
        if not self.processor.delete(key):
            return
        self.redraw()
        if had_property:
            self.options.on_field_remove(key)

    def infer_field_type(self, key: str) -> Optional[FieldType]:
        fragment = self.definition.form_schema.properties.get(key)
        if fragment is None:
            return None
        return resolve_type(fragment, self.definition.ui_schema.get(key))

    def save(self) -> FormDefinition:
        """Stamp the definition and hand a copy to ``on_save``.

        Name validation is left to the host.
        """
        self.definition.updated_at = get_now()
        snapshot = self.get_form_data()
        logger.info(f"Saving form {snapshot.id or '<new>'} ({snapshot.name!r})")
        self.options.on_save(snapshot)
        return snapshot

    def preview(self) -> str:
        html = self.live_renderer.render(self.definition)
        self.options.on_preview(self.get_form_data())
        return html


class FormSession:
    """A builder over a stored form; ``commit`` saves it through the storage.

    The storage is only reached through the builder's ``on_save`` callback.
    """

    def __init__(
        self,
        storage,
        options: Optional[BuilderOptions] = None,
        form_id: Optional[str] = None,
    ) -> None:
        self.storage = storage
        self.saved: Optional[FormDefinition] = None

        options = (options or BuilderOptions()).model_copy(update={"on_save": self._persist})
        self.builder = FormBuilder(options=options)
        if form_id is not None:
            self.builder.load_form(storage.load(form_id))

    def _persist(self, definition: FormDefinition) -> None:
        self.saved = self.storage.save(definition)

    def commit(self) -> FormDefinition:
        self.builder.save()
        return self.saved
