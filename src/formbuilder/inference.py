"""Classify arbitrary schema fragments as canonical field types.

Inference is an ordered table of ``(name, predicate, field type)`` rules
evaluated top to bottom; the first matching rule wins and ``text`` is the
fallback. Fragments come from persisted forms and other tools, so inference
never raises: a predicate that errors on a malformed fragment simply does not
match.

The encoding is lossy. ``select`` and ``radio`` share the same fragment, and
``file``/``signature`` are told apart only by "Signature" appearing in the
title. ``resolve_type`` uses the UI hint, when one is present, to recover the
exact type.
"""

import logging
from typing import Any, Callable, Mapping, NamedTuple, Optional

from pydantic import BaseModel

from .consts import DIVIDER_MARKER, SECTION_MARKER, SIGNATURE_MARKER, UI_WIDGET
from .enums import FieldType

logger = logging.getLogger(__name__)

_MISSING = object()


def _get(fragment: Any, name: str, default: Any = None) -> Any:
    if isinstance(fragment, Mapping):
        value = fragment.get(name, _MISSING)
    else:
        value = _MISSING
    return default if value is _MISSING or value is None else value


def _title_contains(fragment: Any, marker: str) -> bool:
    title = _get(fragment, "title")
    return isinstance(title, str) and marker in title


def _is_type(fragment: Any, type_name: str) -> bool:
    return _get(fragment, "type") == type_name


def _has_enum(fragment: Any) -> bool:
    return _get(fragment, "enum") is not None


class InferenceRule(NamedTuple):
    name: str
    predicate: Callable[[Any], bool]
    field_type: FieldType


INFERENCE_RULES: list[InferenceRule] = [
    InferenceRule("email-format", lambda f: _get(f, "format") == "email", FieldType.EMAIL),
    InferenceRule("date-format", lambda f: _get(f, "format") == "date", FieldType.DATE),
    InferenceRule(
        "signature-data-url",
        lambda f: _get(f, "format") == "data-url" and _title_contains(f, SIGNATURE_MARKER),
        FieldType.SIGNATURE,
    ),
    InferenceRule("data-url", lambda f: _get(f, "format") == "data-url", FieldType.FILE),
    InferenceRule("multiline", lambda f: bool(_get(f, "multiline")), FieldType.TEXTAREA),
    InferenceRule(
        "string-enum",
        lambda f: _is_type(f, "string") and _has_enum(f),
        FieldType.SELECT,
    ),
    InferenceRule(
        "array-items-enum",
        lambda f: _is_type(f, "array") and _has_enum(_get(f, "items", {})),
        FieldType.CHECKBOX,
    ),
    InferenceRule(
        "number-max-5",
        lambda f: _is_type(f, "number") and _get(f, "maximum") == 5,
        FieldType.RATING,
    ),
    InferenceRule("number", lambda f: _is_type(f, "number"), FieldType.NUMBER),
    InferenceRule(
        "null-section",
        lambda f: _is_type(f, "null") and _title_contains(f, SECTION_MARKER),
        FieldType.SECTION,
    ),
    InferenceRule(
        "null-divider",
        lambda f: _is_type(f, "null") and _title_contains(f, DIVIDER_MARKER),
        FieldType.DIVIDER,
    ),
    InferenceRule(
        "null-content",
        lambda f: _is_type(f, "null") and bool(_get(f, "content")),
        FieldType.HTML,
    ),
]

DEFAULT_FIELD_TYPE = FieldType.TEXT


def _matches(rule: InferenceRule, fragment: Any) -> bool:
    try:
        return bool(rule.predicate(fragment))
    except Exception as e:
        logger.debug(f"Inference rule {rule.name} failed on fragment: {e}")
        return False


def infer(fragment: Any) -> FieldType:
    if isinstance(fragment, BaseModel):
        fragment = fragment.model_dump(exclude_none=True)
    for rule in INFERENCE_RULES:
        if _matches(rule, fragment):
            return rule.field_type
    return DEFAULT_FIELD_TYPE


HINT_WIDGET_TYPES: dict[str, FieldType] = {
    "textarea": FieldType.TEXTAREA,
    "radio": FieldType.RADIO,
    "checkboxes": FieldType.CHECKBOX,
    "file": FieldType.FILE,
    "range": FieldType.RATING,
    "signature": FieldType.SIGNATURE,
    "section": FieldType.SECTION,
    "divider": FieldType.DIVIDER,
    "html": FieldType.HTML,
}


def resolve_type(fragment: Any, ui_hint: Optional[Any] = None) -> FieldType:
    """Infer a field type, letting the UI hint's widget take precedence.

    Args:
        fragment: Schema fragment (model, mapping or anything else)
        ui_hint: Matching ``uiSchema`` entry, if any

    Returns:
        The hinted type when the hint names a known widget, else ``infer(fragment)``.
    """
    if isinstance(ui_hint, Mapping):
        widget = ui_hint.get(UI_WIDGET)
        if isinstance(widget, str) and widget in HINT_WIDGET_TYPES:
            return HINT_WIDGET_TYPES[widget]
    return infer(fragment)
