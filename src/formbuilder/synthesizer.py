"""Default schema fragments and field keys for newly added fields."""

import logging
import time
from typing import Any, Callable, Collection

from .consts import (
    DEFAULT_OPTIONS,
    DIVIDER_TITLE,
    FIELD_KEY_PREFIX,
    HTML_DEFAULT_CONTENT,
    PLACEHOLDER_EMAIL,
    PLACEHOLDER_NUMBER,
    PLACEHOLDER_TEXT,
    RATING_MAX,
    RATING_MIN,
    SECTION_TITLE,
    TEXTAREA_ROWS,
    UI_OPTIONS,
    UI_WIDGET,
)
from .enums import FieldType
from .errors import UnknownFieldType
from .models import FieldSchema
from .registry import type_of

logger = logging.getLogger(__name__)


def _fragment_overrides(field_type: FieldType) -> dict[str, Any]:
    options = list(DEFAULT_OPTIONS)

    match field_type:
        case FieldType.TEXT:
            return {"type": "string", "placeholder": PLACEHOLDER_TEXT}
        case FieldType.EMAIL:
            return {"type": "string", "format": "email", "placeholder": PLACEHOLDER_EMAIL}
        case FieldType.TEXTAREA:
            return {"type": "string", "placeholder": PLACEHOLDER_TEXT, "multiline": True}
        case FieldType.NUMBER:
            return {"type": "number", "placeholder": PLACEHOLDER_NUMBER}
        case FieldType.SELECT | FieldType.RADIO:
            return {"type": "string", "enum": options}
        case FieldType.CHECKBOX:
            return {"type": "array", "items": {"type": "string", "enum": options}}
        case FieldType.DATE:
            return {"type": "string", "format": "date"}
        case FieldType.FILE | FieldType.SIGNATURE:
            return {"type": "string", "format": "data-url"}
        case FieldType.RATING:
            return {"type": "number", "minimum": RATING_MIN, "maximum": RATING_MAX}
        case FieldType.SECTION:
            return {"type": "null", "title": SECTION_TITLE}
        case FieldType.DIVIDER:
            return {"type": "null", "title": DIVIDER_TITLE}
        case FieldType.HTML:
            return {"type": "null", "content": HTML_DEFAULT_CONTENT}


UI_WIDGET_HINTS: dict[FieldType, str] = {
    FieldType.TEXTAREA: "textarea",
    FieldType.RADIO: "radio",
    FieldType.CHECKBOX: "checkboxes",
    FieldType.FILE: "file",
    FieldType.RATING: "range",
    FieldType.SIGNATURE: "signature",
    FieldType.SECTION: "section",
    FieldType.DIVIDER: "divider",
    FieldType.HTML: "html",
}


def synthesize_ui_hint(field_type: FieldType) -> dict[str, Any]:
    widget = UI_WIDGET_HINTS.get(field_type)
    if widget is None:
        return {}

    hint: dict[str, Any] = {UI_WIDGET: widget}
    if field_type == FieldType.TEXTAREA:
        hint[UI_OPTIONS] = {"rows": TEXTAREA_ROWS}
    return hint


def synthesize(field_type: FieldType | str) -> tuple[FieldSchema, dict[str, Any]]:
    """Build the default fragment and UI hint for a canonical field type.

    The result is deterministic and freshly allocated on every call, so
    callers may mutate it freely.

    Raises:
        UnknownFieldType: If ``field_type`` is not a canonical field type
    """
    try:
        field_type = FieldType(field_type)
    except ValueError:
        raise UnknownFieldType(field_type) from None

    fragment = {
        "title": f"New {type_of(field_type).label}",
        "description": "",
        **_fragment_overrides(field_type),
    }
    return FieldSchema.model_validate(fragment), synthesize_ui_hint(field_type)


class KeyGenerator:
    """Generate field keys from a millisecond clock.

    Two keys requested within the same millisecond, or a clock value that is
    already taken, get a counter suffix so results never repeat.
    """

    def __init__(self, clock: Callable[[], float] = time.time, prefix: str = FIELD_KEY_PREFIX):
        self._clock = clock
        self._prefix = prefix
        self._last_ms: int | None = None
        self._counter = 0

    def generate(self, existing: Collection[str] = ()) -> str:
        ms = int(self._clock() * 1000)
        if ms == self._last_ms:
            self._counter += 1
        else:
            self._last_ms = ms
            self._counter = 0

        while True:
            if self._counter:
                key = f"{self._prefix}{ms}_{self._counter}"
            else:
                key = f"{self._prefix}{ms}"
            if key not in existing:
                return key
            self._counter += 1


_default_generator = KeyGenerator()


def generate_key(existing: Collection[str] = ()) -> str:
    return _default_generator.generate(existing)
