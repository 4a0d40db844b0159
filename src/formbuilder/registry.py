"""Static table of canonical field types and their palette metadata."""

from typing import NamedTuple

from .enums import FieldCategory, FieldType


class FieldTypeInfo(NamedTuple):
    label: str
    icon: str
    category: FieldCategory


FIELD_TYPES: dict[FieldType, FieldTypeInfo] = {
    FieldType.TEXT: FieldTypeInfo("Text Input", "📝", FieldCategory.BASIC),
    FieldType.TEXTAREA: FieldTypeInfo("Textarea", "📄", FieldCategory.BASIC),
    FieldType.EMAIL: FieldTypeInfo("Email", "📧", FieldCategory.BASIC),
    FieldType.NUMBER: FieldTypeInfo("Number", "🔢", FieldCategory.BASIC),
    FieldType.SELECT: FieldTypeInfo("Dropdown", "📋", FieldCategory.BASIC),
    FieldType.RADIO: FieldTypeInfo("Radio Buttons", "🔘", FieldCategory.BASIC),
    FieldType.CHECKBOX: FieldTypeInfo("Checkboxes", "☑️", FieldCategory.BASIC),
    FieldType.DATE: FieldTypeInfo("Date Picker", "📅", FieldCategory.BASIC),
    FieldType.FILE: FieldTypeInfo("File Upload", "📎", FieldCategory.ADVANCED),
    FieldType.RATING: FieldTypeInfo("Rating Scale", "⭐", FieldCategory.ADVANCED),
    FieldType.SIGNATURE: FieldTypeInfo("Signature", "✍️", FieldCategory.ADVANCED),
    FieldType.SECTION: FieldTypeInfo("Section Header", "📋", FieldCategory.LAYOUT),
    FieldType.DIVIDER: FieldTypeInfo("Divider", "➖", FieldCategory.LAYOUT),
    FieldType.HTML: FieldTypeInfo("HTML Block", "🔗", FieldCategory.ADVANCED),
}

CATEGORY_LABELS: dict[FieldCategory, str] = {
    FieldCategory.BASIC: "Basic Fields",
    FieldCategory.ADVANCED: "Advanced Fields",
    FieldCategory.LAYOUT: "Layout Elements",
}


def type_of(field_type: FieldType | str) -> FieldTypeInfo:
    return FIELD_TYPES[FieldType(field_type)]


def types_in(category: FieldCategory | str) -> list[FieldType]:
    category = FieldCategory(category)
    return [t for t, info in FIELD_TYPES.items() if info.category == category]


def palette(allow_advanced: bool = True) -> list[tuple[FieldCategory, str, list[FieldType]]]:
    """Group field types for the builder palette.

    Args:
        allow_advanced: When False the advanced category is left out

    Returns:
        ``(category, heading, types)`` tuples in basic, advanced, layout order,
        skipping empty categories.
    """
    groups = []
    for category, heading in CATEGORY_LABELS.items():
        if category == FieldCategory.ADVANCED and not allow_advanced:
            continue
        types = types_in(category)
        if types:
            groups.append((category, heading, types))
    return groups
