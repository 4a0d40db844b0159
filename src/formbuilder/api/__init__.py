import os

from fastapi import APIRouter, FastAPI

from .routes import fields, forms


def create_app(settings=None) -> FastAPI:
    from ..config import Settings
    from ..db import close_db
    from ..storages import get_storage

    if settings is None:
        settings = Settings.load(os.environ.get("CONFIG_FILE", "config.toml"))

    app = FastAPI(title="Form Builder API")

    app.state.settings = settings
    app.state.storage = get_storage(settings=settings)

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(fields.router)
    api_router.include_router(forms.router)
    app.include_router(api_router)

    @app.on_event("shutdown")
    def shutdown_db():
        close_db()

    return app
