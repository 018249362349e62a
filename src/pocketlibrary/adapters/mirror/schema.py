"""Pydantic models for documents held by the remote mirror."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pocketlibrary.domain.model import UNKNOWN_AUTHOR


class MirrorBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BookDocument(MirrorBaseModel):
    """Flat, field-for-field serialisation of a book record."""

    id: str
    title: str
    author: str = UNKNOWN_AUTHOR
    year: int | None = None
    cover_url: str | None = Field(default=None, alias="coverUrl")
    local_photo_path: str | None = Field(default=None, alias="localPhotoPath")


class DocumentListResponse(MirrorBaseModel):
    documents: list[object]

    @model_validator(mode="before")
    @classmethod
    def _normalize_bare_list(cls, value: object) -> object:
        if isinstance(value, list):
            return {"documents": value}
        if isinstance(value, Mapping):
            return cast(Mapping[str, object], value)
        return value
