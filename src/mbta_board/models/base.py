"""Base model class for MBTA API payload models."""

from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, ValidationInfo, field_validator


class BaseModel(PydanticBaseModel):
    """Read-only view over a piece of decoded JSON.

    Unknown keys are ignored and blank strings are read as missing, so an
    empty ``platform_code`` and an absent one look the same to every consumer.
    A null nested object (``"attributes": null``) reads as its empty default.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_or_blank_is_missing(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        if v is None:
            default = cls.model_fields[info.field_name].default
            if isinstance(default, PydanticBaseModel):
                return default
        return v
