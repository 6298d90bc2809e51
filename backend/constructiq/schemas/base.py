# backend/constructiq/schemas/base.py
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from ..utils.naming import to_camel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Form fields arrive as "" when left empty
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]
OptionalAmount = Annotated[Optional[Annotated[float, Field(ge=0)]], BeforeValidator(_blank_to_none)]
RequiredText = Annotated[str, Field(min_length=1)]


class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Record(BaseSchema):
    """A stored entity: identifier and creation time are immutable"""
    id: str
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _restore_blank_text(cls, data: Any) -> Any:
        # The relational store writes "" as NULL; read it back as ""
        if not isinstance(data, dict):
            return data
        restored = dict(data)
        for name, field in cls.model_fields.items():
            if field.default != "":
                continue
            for key in (field.alias, name):
                if key in restored and restored[key] is None:
                    restored[key] = ""
        return restored


class ProjectRecord(Record):
    project_id: str
