"""Enumeration type definitions"""

from enum import Enum


class FieldCategory(str, Enum):
    """Palette grouping of canonical field types"""

    BASIC = "basic"
    ADVANCED = "advanced"
    LAYOUT = "layout"


class FieldType(str, Enum):
    """Canonical, editor-facing field types"""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"
    FILE = "file"
    RATING = "rating"
    SIGNATURE = "signature"
    SECTION = "section"
    DIVIDER = "divider"
    HTML = "html"


class RenderMode(str, Enum):
    PREVIEW = "preview"
    LIVE = "live"


class StorageType(str, Enum):
    FILE = "file"
    DB = "db"
