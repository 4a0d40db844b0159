"""Builder-canvas preview and live form rendering with Jinja2 templates."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .consts import (
    MSG_INVALID_DATE,
    MSG_INVALID_EMAIL,
    MSG_INVALID_OPTION,
    MSG_MAX,
    MSG_MIN,
    MSG_NOT_A_NUMBER,
    MSG_REQUIRED,
    RATING_MAX,
    RATING_MIN,
    RATING_SCALE_LIMIT,
    TEMPLATE_BUILDER,
    TEMPLATE_LIVE,
    TEMPLATE_PREVIEW,
    TEXTAREA_ROWS,
    UI_OPTIONS,
)
from .enums import FieldType
from .errors import SubmissionError
from .inference import resolve_type
from .models import FieldSchema, FormDefinition
from .registry import FIELD_TYPES, palette, type_of
from .utils import parse_int, parse_number

logger = logging.getLogger(__name__)

# Single source of truth for which widget a canonical type renders as.
WIDGETS: dict[FieldType, str] = {
    FieldType.TEXT: "text-input",
    FieldType.TEXTAREA: "textarea",
    FieldType.EMAIL: "email-input",
    FieldType.NUMBER: "number-input",
    FieldType.SELECT: "select",
    FieldType.RADIO: "radio-group",
    FieldType.CHECKBOX: "checkbox-group",
    FieldType.DATE: "date-input",
    FieldType.FILE: "file-input",
    FieldType.RATING: "rating",
    FieldType.SIGNATURE: "signature-pad",
    FieldType.SECTION: "section-header",
    FieldType.DIVIDER: "divider",
    FieldType.HTML: "html-block",
}

VALUELESS_TYPES = frozenset({FieldType.SECTION, FieldType.DIVIDER, FieldType.HTML})

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_ABSENT = object()


@dataclass
class WidgetNode:
    """One rendered field, independent of markup."""

    key: str
    field_type: FieldType
    widget: str
    label: str
    icon: str
    dom_id: str
    disabled: bool
    required: bool = False
    description: str = ""
    placeholder: str = ""
    options: list[str] = field(default_factory=list)
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None
    rows: int = TEXTAREA_ROWS
    content: str = ""
    value: Any = None
    error: Optional[str] = None

    @property
    def is_layout(self) -> bool:
        return self.field_type in VALUELESS_TYPES

    @property
    def scale(self) -> list[int]:
        low, high = _scale_bounds(self.minimum, self.maximum)
        if high - low + 1 > RATING_SCALE_LIMIT:
            return []
        return list(range(low, high + 1))


def _scale_bounds(minimum: Any, maximum: Any) -> tuple[int, int]:
    low = parse_int(minimum)
    high = parse_int(maximum)
    return (RATING_MIN if low is None else low), (RATING_MAX if high is None else high)


def widget_for(field_type: FieldType, fragment: FieldSchema) -> str:
    """Look up the widget for a field, demoting over-wide ratings to a number input."""
    if field_type == FieldType.RATING:
        low, high = _scale_bounds(fragment.minimum, fragment.maximum)
        if high - low + 1 > RATING_SCALE_LIMIT:
            return WIDGETS[FieldType.NUMBER]
    return WIDGETS[field_type]


def field_options(fragment: FieldSchema) -> list[str]:
    if fragment.enum is not None:
        return [str(opt) for opt in fragment.enum]
    if fragment.items is not None and fragment.items.enum is not None:
        return [str(opt) for opt in fragment.items.enum]
    return []


def _rows(hint: Any) -> int:
    if isinstance(hint, Mapping):
        options = hint.get(UI_OPTIONS)
        if isinstance(options, Mapping) and isinstance(options.get("rows"), int):
            return options["rows"]
    return TEXTAREA_ROWS


def build_nodes(
    definition: FormDefinition,
    *,
    interactive: bool,
    values: Optional[Mapping[str, Any]] = None,
    errors: Optional[Mapping[str, str]] = None,
) -> list[WidgetNode]:
    """Turn a definition into an ordered list of widget nodes.

    Args:
        definition: Form to render
        interactive: False for the inert builder preview, True for the live form
        values: Current values (live form only)
        errors: Validation messages keyed by field (live form only)

    Returns:
        One node per property, in property order.
    """
    prefix = "live" if interactive else "preview"
    values = values if interactive and values is not None else {}
    errors = errors if interactive and errors is not None else {}

    nodes = []
    for key, fragment in definition.form_schema.properties.items():
        hint = definition.ui_schema.get(key)
        field_type = resolve_type(fragment, hint)
        nodes.append(
            WidgetNode(
                key=key,
                field_type=field_type,
                widget=widget_for(field_type, fragment),
                label=fragment.title or key,
                icon=type_of(field_type).icon,
                dom_id=f"{prefix}-{key}",
                disabled=not interactive,
                required=definition.is_required(key),
                description=fragment.description or "",
                placeholder=fragment.placeholder or "",
                options=field_options(fragment),
                minimum=fragment.minimum,
                maximum=fragment.maximum,
                rows=_rows(hint),
                content=fragment.content or "",
                value=values.get(key),
                error=errors.get(key),
            )
        )
    return nodes


class _TemplateRenderer:
    def __init__(self, template_dir: Path | None = None):
        template_dir = template_dir or Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )


class PreviewRenderer(_TemplateRenderer):
    """Inert rendering used inside the builder canvas.

    Every control is disabled; the output never collects values.
    """

    def nodes(self, definition: FormDefinition) -> list[WidgetNode]:
        return build_nodes(definition, interactive=False)

    def render(self, definition: FormDefinition) -> str:
        template = self.jinja_env.get_template(TEMPLATE_PREVIEW)
        return template.render(form=definition, nodes=self.nodes(definition))

    def render_canvas(
        self,
        definition: FormDefinition,
        *,
        show_preview: bool = True,
        allow_advanced: bool = True,
    ) -> str:
        """Render the whole builder: header, palette, field canvas, preview pane."""
        template = self.jinja_env.get_template(TEMPLATE_BUILDER)
        return template.render(
            form=definition,
            nodes=self.nodes(definition),
            palette=palette(allow_advanced=allow_advanced),
            field_types=FIELD_TYPES,
            show_preview=show_preview,
        )


class LiveRenderer(_TemplateRenderer):
    """Interactive rendering of a form that can be filled in and submitted."""

    def nodes(
        self,
        definition: FormDefinition,
        values: Optional[Mapping[str, Any]] = None,
        errors: Optional[Mapping[str, str]] = None,
    ) -> list[WidgetNode]:
        return build_nodes(definition, interactive=True, values=values, errors=errors)

    def render(
        self,
        definition: FormDefinition,
        values: Optional[Mapping[str, Any]] = None,
        errors: Optional[Mapping[str, str]] = None,
    ) -> str:
        template = self.jinja_env.get_template(TEMPLATE_LIVE)
        return template.render(
            form=definition,
            nodes=self.nodes(definition, values, errors),
        )

    def validate(
        self, definition: FormDefinition, values: Mapping[str, Any]
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Clean submitted values field by field.

        Returns:
            ``(cleaned, errors)``: cleaned values for present fields in property
            order, and the first error message per failing field.
        """
        cleaned: dict[str, Any] = {}
        errors: dict[str, str] = {}

        for node in self.nodes(definition):
            if node.is_layout:
                continue

            fragment = definition.form_schema.properties[node.key]
            value, error = clean_value(node.field_type, fragment, values.get(node.key))
            if error is None and value is _ABSENT and node.required:
                error = MSG_REQUIRED

            if error is not None:
                errors[node.key] = error
            elif value is not _ABSENT:
                cleaned[node.key] = value

        return cleaned, errors

    def submit(self, definition: FormDefinition, values: Mapping[str, Any]) -> dict[str, Any]:
        """Validate submitted values and return the flat ``key -> value`` map.

        Unset optional fields are left out rather than set to None.

        Raises:
            SubmissionError: If any field fails validation
        """
        cleaned, errors = self.validate(definition, values)
        if errors:
            logger.info(f"Submission rejected for form {definition.id}: {sorted(errors)}")
            raise SubmissionError(errors)
        return cleaned


def _is_blank(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    if isinstance(raw, (list, tuple)):
        return len(raw) == 0
    return False


def clean_value(field_type: FieldType, fragment: FieldSchema, raw: Any) -> tuple[Any, Optional[str]]:
    """Coerce one submitted value for its field type.

    Returns:
        ``(value, error)``; value is the ``_ABSENT`` marker for blank input.
    """
    if _is_blank(raw):
        return _ABSENT, None

    match field_type:
        case FieldType.NUMBER | FieldType.RATING:
            number = parse_number(raw)
            if number is None:
                return _ABSENT, MSG_NOT_A_NUMBER
            if fragment.minimum is not None and number < fragment.minimum:
                return _ABSENT, MSG_MIN.format(minimum=fragment.minimum)
            if fragment.maximum is not None and number > fragment.maximum:
                return _ABSENT, MSG_MAX.format(maximum=fragment.maximum)
            return number, None

        case FieldType.SELECT | FieldType.RADIO:
            value = str(raw).strip()
            options = field_options(fragment)
            if options and value not in options:
                return _ABSENT, MSG_INVALID_OPTION
            return value, None

        case FieldType.CHECKBOX:
            if isinstance(raw, str):
                items = [raw]
            elif isinstance(raw, (list, tuple)):
                items = list(raw)
            else:
                return _ABSENT, MSG_INVALID_OPTION
            selected = [str(item).strip() for item in items if not _is_blank(item)]
            options = field_options(fragment)
            if options and any(item not in options for item in selected):
                return _ABSENT, MSG_INVALID_OPTION
            return (selected, None) if selected else (_ABSENT, None)

        case FieldType.EMAIL:
            value = str(raw).strip()
            if not EMAIL_PATTERN.match(value):
                return _ABSENT, MSG_INVALID_EMAIL
            return value, None

        case FieldType.DATE:
            value = str(raw).strip()
            try:
                date.fromisoformat(value)
            except ValueError:
                return _ABSENT, MSG_INVALID_DATE
            return value, None

        case _:
            return (raw.strip() if isinstance(raw, str) else raw), None
