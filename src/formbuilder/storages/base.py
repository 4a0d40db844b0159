from typing import Protocol

from formbuilder.models import FormDefinition


class FormStorage(Protocol):
    def load(self, form_id: str) -> FormDefinition: ...

    def save(self, definition: FormDefinition) -> FormDefinition: ...

    def list_forms(self) -> list[FormDefinition]: ...
