from fastapi import APIRouter
from pydantic import BaseModel

from ...registry import palette, type_of

router = APIRouter(prefix="/field-types", tags=["field-types"])


class FieldTypeResponse(BaseModel):
    type: str
    label: str
    icon: str
    category: str


class FieldCategoryResponse(BaseModel):
    category: str
    label: str
    types: list[FieldTypeResponse]


class FieldTypesResponse(BaseModel):
    success: bool = True
    categories: list[FieldCategoryResponse]


@router.get("", response_model=FieldTypesResponse)
def list_field_types(allow_advanced: bool = True):
    categories = []
    for category, heading, types in palette(allow_advanced=allow_advanced):
        entries = []
        for field_type in types:
            info = type_of(field_type)
            entries.append(
                FieldTypeResponse(
                    type=field_type.value,
                    label=info.label,
                    icon=info.icon,
                    category=info.category.value,
                )
            )
        categories.append(
            FieldCategoryResponse(category=category.value, label=heading, types=entries)
        )
    return FieldTypesResponse(categories=categories)
