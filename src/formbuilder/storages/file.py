import json
import logging
import re
import uuid
from pathlib import Path

from pydantic import ValidationError

from formbuilder.errors import FormNotFound, StorageException
from formbuilder.models import FormDefinition
from formbuilder.utils import write_text_atomic

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class FileStorage:
    """One JSON document per form under ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path(self, form_id: str) -> Path:
        if not _SAFE_ID.match(form_id):
            raise FormNotFound(form_id)
        return self._directory / f"{form_id}.json"

    def load(self, form_id: str) -> FormDefinition:
        path = self._path(form_id)
        if not path.exists():
            raise FormNotFound(form_id)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return FormDefinition.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise StorageException(f"Failed to read form from {path}: {e}") from e

    def save(self, definition: FormDefinition) -> FormDefinition:
        saved = definition.model_copy(deep=True)
        if not saved.id:
            saved.id = uuid.uuid4().hex
        path = self._path(saved.id)

        try:
            write_text_atomic(path, json.dumps(saved.to_dict(), ensure_ascii=False, indent=2))
        except OSError as e:
            raise StorageException(f"Failed to write form to {path}: {e}") from e

        logger.info(f"Form saved: {saved.id} -> {path}")
        return saved

    def list_forms(self) -> list[FormDefinition]:
        if not self._directory.exists():
            return []
        return [self.load(path.stem) for path in sorted(self._directory.glob("*.json"))]
