"""Pydantic models describing the Open Library search payload."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OpenLibraryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SearchDoc(OpenLibraryBaseModel):
    key: str | None = None
    title: str | None = None
    author_name: list[str | None] = Field(default_factory=list)
    first_publish_year: int | None = None
    cover_i: int | None = None

    _normalize_key = field_validator("key", "title", mode="before")(_blank_to_none)

    @field_validator("author_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def first_author(self) -> str | None:
        for name in self.author_name:
            if name and name.strip():
                return name.strip()
        return None


class SearchResponse(OpenLibraryBaseModel):
    num_found: int | None = Field(default=None, alias="numFound")
    docs: list[SearchDoc] = Field(default_factory=list)


SearchDocInput = SearchDoc | Mapping[str, object]
