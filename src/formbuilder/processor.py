"""Structural operations on a form definition."""

import copy
import logging
from typing import Any, Mapping, Optional

from .consts import COPY_TITLE_SUFFIX
from .enums import FieldType
from .errors import CollisionError
from .models import FieldMutations, FieldSchema, FormDefinition
from .synthesizer import KeyGenerator, generate_key, synthesize
from .utils import parse_int, split_lines

logger = logging.getLogger(__name__)

_TEXT_PROPS = ("title", "description", "placeholder", "content")
_NUMERIC_PROPS = ("minimum", "maximum")


class FieldOperationProcessor:
    """Add, edit, duplicate and delete fields of one form definition.

    Every operation keeps ``required`` a subset of the property keys and never
    reorders existing properties: new and duplicated fields are appended.
    """

    def __init__(
        self,
        definition: FormDefinition,
        key_generator: Optional[KeyGenerator] = None,
    ) -> None:
        self.definition = definition
        self._key_generator = key_generator

    @property
    def _properties(self) -> dict[str, FieldSchema]:
        return self.definition.form_schema.properties

    @property
    def _required(self) -> list[str]:
        return self.definition.form_schema.required

    def _new_key(self) -> str:
        existing = set(self._properties) | set(self.definition.ui_schema)
        if self._key_generator is not None:
            return self._key_generator.generate(existing)
        return generate_key(existing)

    def add(self, field_type: FieldType | str, key: Optional[str] = None) -> str:
        """Append a synthesized field and return its key.

        Raises:
            CollisionError: If ``key`` is given and already names a property
            UnknownFieldType: If ``field_type`` is not a canonical type
        """
        if key is not None and key in self._properties:
            raise CollisionError(key)

        fragment, hint = synthesize(field_type)
        if key is None:
            key = self._new_key()

        self._properties[key] = fragment
        self.definition.ui_schema[key] = hint
        logger.debug(f"Added field {key} ({FieldType(field_type).value})")
        return key

    def edit(self, key: str, mutations: Mapping[str, Any] | FieldMutations) -> None:
        """Apply field-level edits; a missing ``key`` is a no-op.

        Non-numeric bounds and unreadable ``required`` flags are ignored.

        Raises:
            ValidationError: If a text attribute is given a list or an object
        """
        fragment = self._properties.get(key)
        if fragment is None:
            logger.debug(f"Ignoring edit of missing field {key}")
            return

        if not isinstance(mutations, FieldMutations):
            mutations = FieldMutations.model_validate(dict(mutations))
        provided = mutations.model_fields_set

        for prop in _TEXT_PROPS:
            if prop in provided:
                value = getattr(mutations, prop)
                setattr(fragment, prop, "" if value is None else value)

        for prop in _NUMERIC_PROPS:
            if prop not in provided:
                continue
            number = parse_int(getattr(mutations, prop))
            if number is None:
                logger.debug(f"Ignoring non-numeric {prop} for field {key}")
                continue
            setattr(fragment, prop, number)

        if "enum" in provided and mutations.enum is not None:
            options = split_lines(mutations.enum)
            if fragment.type == "array":
                if fragment.items is None:
                    fragment.items = FieldSchema()
                fragment.items.enum = options
            else:
                fragment.enum = options

        if "required" in provided and mutations.required is not None:
            self._set_required(key, mutations.required)

        logger.debug(f"Edited field {key}: {sorted(provided)}")

    def _set_required(self, key: str, required: bool) -> None:
        if required and key not in self._required:
            self._required.append(key)
        elif not required and key in self._required:
            self._required.remove(key)

    def duplicate(self, key: str) -> Optional[str]:
        """Copy a field under a fresh key at the end of the form.

        Returns:
            The new key, or None when ``key`` does not exist.
        """
        fragment = self._properties.get(key)
        if fragment is None:
            logger.debug(f"Ignoring duplicate of missing field {key}")
            return None

        new_key = self._new_key()
        clone = fragment.model_copy(deep=True)
        clone.title = f"{clone.title or ''}{COPY_TITLE_SUFFIX}"
        self._properties[new_key] = clone

        hint = self.definition.ui_schema.get(key)
        if hint is not None:
            self.definition.ui_schema[new_key] = copy.deepcopy(hint)

        logger.debug(f"Duplicated field {key} as {new_key}")
        return new_key

    def delete(self, key: str) -> bool:
        """Remove a field, its UI hint and its required flag.

        Returns:
            True if anything was removed.
        """
        removed = self._properties.pop(key, None) is not None
        removed = self.definition.ui_schema.pop(key, None) is not None or removed
        if key in self._required:
            self._required.remove(key)
            removed = True

        if removed:
            logger.debug(f"Deleted field {key}")
        return removed
