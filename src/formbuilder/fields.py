"""Tagged field variants: a lossless alternative to the JSON-Schema encoding.

Each variant carries its canonical type in ``kind``, so no inference is
needed to read it back. ``to_tagged`` and ``from_tagged`` convert between a
schema fragment (plus its UI hint) and a variant.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from .enums import FieldType
from .inference import resolve_type
from .models import FieldSchema
from .renderer import field_options
from .synthesizer import synthesize


class _TaggedBase(BaseModel):
    title: str = ""
    description: str = ""


class TextField(_TaggedBase):
    kind: Literal["text", "textarea", "email", "date"]
    placeholder: Optional[str] = None


class NumberField(_TaggedBase):
    kind: Literal["number", "rating"]
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None
    placeholder: Optional[str] = None


class SelectField(_TaggedBase):
    kind: Literal["select", "radio", "checkbox"]
    options: list[str] = Field(default_factory=list)


class UploadField(_TaggedBase):
    kind: Literal["file", "signature"]


class LayoutField(_TaggedBase):
    kind: Literal["section", "divider", "html"]
    content: Optional[str] = None


TaggedField = Annotated[
    Union[TextField, NumberField, SelectField, UploadField, LayoutField],
    Field(discriminator="kind"),
]

tagged_field_adapter: TypeAdapter[Any] = TypeAdapter(TaggedField)


def to_tagged(fragment: FieldSchema, ui_hint: Optional[dict[str, Any]] = None):
    field_type = resolve_type(fragment, ui_hint)
    common = {
        "kind": field_type.value,
        "title": fragment.title or "",
        "description": fragment.description or "",
    }

    match field_type:
        case FieldType.TEXT | FieldType.TEXTAREA | FieldType.EMAIL | FieldType.DATE:
            return TextField(placeholder=fragment.placeholder, **common)
        case FieldType.NUMBER | FieldType.RATING:
            return NumberField(
                minimum=fragment.minimum,
                maximum=fragment.maximum,
                placeholder=fragment.placeholder,
                **common,
            )
        case FieldType.SELECT | FieldType.RADIO | FieldType.CHECKBOX:
            return SelectField(options=field_options(fragment), **common)
        case FieldType.FILE | FieldType.SIGNATURE:
            return UploadField(**common)
        case _:
            return LayoutField(content=fragment.content, **common)


def from_tagged(field) -> tuple[FieldSchema, dict[str, Any]]:
    """Encode a tagged variant as a schema fragment and UI hint."""
    fragment, hint = synthesize(field.kind)
    fragment.title = field.title
    fragment.description = field.description

    if isinstance(field, (TextField, NumberField)):
        fragment.placeholder = field.placeholder
    if isinstance(field, NumberField):
        fragment.minimum = field.minimum
        fragment.maximum = field.maximum
    if isinstance(field, SelectField):
        if fragment.items is not None:
            fragment.items.enum = list(field.options)
        else:
            fragment.enum = list(field.options)
    if isinstance(field, LayoutField):
        fragment.content = field.content

    return fragment, hint
