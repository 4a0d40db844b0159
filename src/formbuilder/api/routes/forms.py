import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from ...builder import FormSession
from ...enums import FieldType
from ...errors import CollisionError, FormNotFound, StorageException, SubmissionError
from ...fields import to_tagged
from ...models import FieldMutations, FormDefinition
from ...renderer import LiveRenderer, PreviewRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])

preview_renderer = PreviewRenderer()
live_renderer = LiveRenderer()


class FormResponse(BaseModel):
    success: bool = True
    form: dict


class FormListResponse(BaseModel):
    success: bool = True
    forms: list[dict]


class FieldAddedResponse(BaseModel):
    success: bool = True
    key: str
    form: dict


class TaggedFieldResponse(BaseModel):
    key: str
    required: bool
    field: dict


class TaggedFieldsResponse(BaseModel):
    success: bool = True
    fields: list[TaggedFieldResponse]


class FormCreateRequest(BaseModel):
    name: str
    description: str = ""


class FormInfoRequest(BaseModel):
    name: str | None = None
    description: str | None = None


class FieldAddRequest(BaseModel):
    type: FieldType
    key: str | None = None


class SubmitRequest(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


class SubmitResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


def _session(request: Request, form_id: str | None = None) -> FormSession:
    settings = request.app.state.settings
    try:
        return FormSession(request.app.state.storage, settings.builder_options(), form_id)
    except FormNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except StorageException as e:
        logger.error(f"Failed to load form {form_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _commit(session: FormSession) -> FormDefinition:
    try:
        return session.commit()
    except StorageException as e:
        logger.error(f"Failed to save form: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _load(storage, form_id: str) -> FormDefinition:
    try:
        return storage.load(form_id)
    except FormNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except StorageException as e:
        logger.error(f"Failed to load form {form_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise HTTPException(status_code=400, detail="Please enter a form name")
    return name.strip()


@router.get("", response_model=FormListResponse)
def list_forms(request: Request):
    forms = request.app.state.storage.list_forms()
    return FormListResponse(forms=[form.to_dict() for form in forms])


@router.post("", response_model=FormResponse)
def create_form(request: Request, body: FormCreateRequest):
    session = _session(request)
    session.builder.set_info(name=_require_name(body.name), description=body.description)
    return FormResponse(form=_commit(session).to_dict())


@router.get("/{form_id}", response_model=FormResponse)
def get_form(request: Request, form_id: str):
    return FormResponse(form=_load(request.app.state.storage, form_id).to_dict())


@router.patch("/{form_id}", response_model=FormResponse)
def update_form_info(request: Request, form_id: str, body: FormInfoRequest):
    session = _session(request, form_id)
    name = _require_name(body.name) if body.name is not None else None
    session.builder.set_info(name=name, description=body.description)
    return FormResponse(form=_commit(session).to_dict())


@router.get("/{form_id}/fields", response_model=TaggedFieldsResponse)
def list_fields(request: Request, form_id: str):
    definition = _load(request.app.state.storage, form_id)
    fields = [
        TaggedFieldResponse(
            key=key,
            required=definition.is_required(key),
            field=to_tagged(fragment, definition.ui_schema.get(key)).model_dump(),
        )
        for key, fragment in definition.form_schema.properties.items()
    ]
    return TaggedFieldsResponse(fields=fields)


@router.post("/{form_id}/fields", response_model=FieldAddedResponse)
def add_field(request: Request, form_id: str, body: FieldAddRequest):
    session = _session(request, form_id)
    try:
        key = session.builder.add_field(body.type, body.key)
    except CollisionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return FieldAddedResponse(key=key, form=_commit(session).to_dict())


@router.patch("/{form_id}/fields/{key}", response_model=FormResponse)
def edit_field(request: Request, form_id: str, key: str, body: FieldMutations):
    session = _session(request, form_id)
    if key not in session.builder.definition.form_schema.properties:
        raise HTTPException(status_code=404, detail="Field not found")
    session.builder.edit_field(key, body)
    return FormResponse(form=_commit(session).to_dict())


@router.post("/{form_id}/fields/{key}/duplicate", response_model=FieldAddedResponse)
def duplicate_field(request: Request, form_id: str, key: str):
    session = _session(request, form_id)
    new_key = session.builder.duplicate_field(key)
    if new_key is None:
        raise HTTPException(status_code=404, detail="Field not found")
    return FieldAddedResponse(key=new_key, form=_commit(session).to_dict())


@router.delete("/{form_id}/fields/{key}", response_model=FormResponse)
def delete_field(request: Request, form_id: str, key: str):
    session = _session(request, form_id)
    session.builder.delete_field(key)
    return FormResponse(form=_commit(session).to_dict())


@router.get("/{form_id}/preview", response_class=HTMLResponse)
def preview_form(request: Request, form_id: str):
    definition = _load(request.app.state.storage, form_id)
    return HTMLResponse(preview_renderer.render(definition))


@router.get("/{form_id}/live", response_class=HTMLResponse)
def live_form(request: Request, form_id: str):
    session = _session(request, form_id)
    return HTMLResponse(session.builder.preview())


@router.post("/{form_id}/submit", response_model=SubmitResponse)
def submit_form(request: Request, form_id: str, body: SubmitRequest):
    definition = _load(request.app.state.storage, form_id)
    try:
        data = live_renderer.submit(definition, body.values)
    except SubmissionError as e:
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": str(e), "errors": e.errors},
        )
    return SubmitResponse(data=data)
