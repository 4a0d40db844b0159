"""Exception definitions for the form builder"""


class FormBuilderException(Exception):
    """Base exception for all form builder errors.

    All custom exceptions in the package inherit from this class. Use this as
    a catch-all when you don't need to handle specific exception types.
    """

    pass


class CollisionError(FormBuilderException):
    """Raised when a caller-supplied field key is already in use.

    Only ``add()`` with an explicit key raises this; generated keys are
    guaranteed to be free.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Field key already exists: {key}")
        self.key = key


class UnknownFieldType(FormBuilderException):
    """Raised when a value is not one of the canonical field types."""

    def __init__(self, value) -> None:
        super().__init__(f"Unknown field type: {value!r}")
        self.value = value


class ConfigException(FormBuilderException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class StorageException(FormBuilderException):
    """Raised when a persistence adapter cannot load or save a form."""

    pass


class FormNotFound(StorageException):
    def __init__(self, form_id: str) -> None:
        super().__init__(f"Form not found: {form_id}")
        self.form_id = form_id


class SubmissionError(FormBuilderException):
    """Raised when live form values fail validation.

    ``errors`` maps each failing field key to its first error message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Please correct the errors before submitting")
        self.errors = errors
