from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

_FLAG_WORDS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


class FieldSchema(BaseModel):
    """On-disk description of one field (a subset of JSON Schema).

    Unknown attributes are kept so fragments written by other tools survive
    a load/save cycle.
    """

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    format: Optional[str] = None
    enum: Optional[list[Any]] = None
    items: Optional[FieldSchema] = None
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None
    placeholder: Optional[str] = None
    multiline: Optional[bool] = None
    content: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class FormSchema(BaseModel):
    type: str = "object"
    properties: dict[str, FieldSchema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def drop_dangling_required(self) -> FormSchema:
        cleaned: list[str] = []
        for key in self.required:
            if key not in self.properties:
                logger.warning(f"Dropping required key without property: {key}")
                continue
            if key not in cleaned:
                cleaned.append(key)
        self.required = cleaned
        return self


class FormDefinition(BaseModel):
    """A form as edited by the builder and exchanged with storage."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = ""
    description: str = ""
    form_schema: FormSchema = Field(default_factory=FormSchema, alias="schema")
    ui_schema: dict[str, Any] = Field(default_factory=dict, alias="uiSchema")
    form_data: dict[str, Any] = Field(default_factory=dict, alias="formData")
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def drop_null_values(cls, values):
        if not isinstance(values, dict):
            return values
        return {k: v for k, v in values.items() if v is not None}

    @property
    def properties(self) -> dict[str, FieldSchema]:
        return self.form_schema.properties

    @property
    def required(self) -> list[str]:
        return self.form_schema.required

    def is_required(self, key: str) -> bool:
        return key in self.form_schema.required

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FieldMutations(BaseModel):
    """Field-level edits accepted by the operation processor.

    Only attributes explicitly provided are applied. ``minimum``/``maximum``
    take raw input and are parsed leniently; ``enum`` is a text blob with one
    option per line (a list is accepted too). Numbers given for the text
    attributes are stored as text, and a ``required`` flag that cannot be read
    as a boolean is ignored. Lists or objects given for a text attribute raise
    ``ValidationError``.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    content: Optional[str] = None
    minimum: Any = None
    maximum: Any = None
    enum: Any = None
    required: Optional[bool] = None

    @field_validator("title", "description", "placeholder", "content", mode="before")
    @classmethod
    def coerce_scalar_text(cls, value):
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @field_validator("required", mode="before")
    @classmethod
    def lenient_flag(cls, value):
        if isinstance(value, bool) or value is None:
            return value
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            flag = _FLAG_WORDS.get(value.strip().lower())
            if flag is not None:
                return flag
        logger.debug(f"Ignoring unreadable required flag: {value!r}")
        return None
