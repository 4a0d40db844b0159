from formbuilder.config import Settings
from formbuilder.enums import StorageType
from formbuilder.errors import ConfigException

from .base import FormStorage
from .db import DBStorage
from .file import FileStorage

__all__ = ["DBStorage", "FileStorage", "FormStorage", "get_storage"]


def get_storage(*, settings: Settings) -> FormStorage:
    storage_type = settings.storage.type

    if storage_type == StorageType.FILE:
        return FileStorage(settings.storage.directory)

    if storage_type == StorageType.DB:
        from formbuilder.db import create_tables, init_db

        init_db(settings.storage.database_path)
        create_tables()
        return DBStorage()

    raise ConfigException(f"Unknown storage type: {storage_type}")
