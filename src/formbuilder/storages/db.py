import logging
import uuid

from formbuilder.errors import FormNotFound
from formbuilder.models import FormDefinition

logger = logging.getLogger(__name__)


class DBStorage:
    """Form definitions stored as JSON in the ``forms`` table."""

    def load(self, form_id: str) -> FormDefinition:
        from formbuilder.db import FormRecord

        record = FormRecord.get_or_none(FormRecord.form_id == form_id)
        if record is None:
            raise FormNotFound(form_id)
        return FormDefinition.model_validate(record.definition)

    def save(self, definition: FormDefinition) -> FormDefinition:
        from formbuilder.db import FormRecord

        saved = definition.model_copy(deep=True)
        if not saved.id:
            saved.id = uuid.uuid4().hex

        record = FormRecord.get_or_none(FormRecord.form_id == saved.id)
        if record is None:
            record = FormRecord(form_id=saved.id)
        record.name = saved.name
        record.description = saved.description
        record.definition = saved.to_dict()
        record.save()

        logger.info(f"Form saved: {saved.id} (record={record.id})")
        return saved

    def list_forms(self) -> list[FormDefinition]:
        from formbuilder.db import FormRecord

        return [
            FormDefinition.model_validate(record.definition)
            for record in FormRecord.select().order_by(FormRecord.created_at, FormRecord.id)
        ]
