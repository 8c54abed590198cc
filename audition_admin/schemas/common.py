"""
Shared pydantic building blocks for admin backend payloads.

The backend wraps every JSON body in a ``{success, message, data, metadata}``
envelope and uses camelCase for most (not all) field names.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

SortOrder = Literal["ASC", "DESC"]


class AdminModel(BaseModel):
    """Base model accepting both the backend's aliases and Python field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Pagination(AdminModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")


class Page(AdminModel, Generic[T]):
    """One page of a list endpoint's results."""

    items: List[T] = Field(default_factory=list, alias="data")
    total: int = 0
    pagination: Optional[Pagination] = None

    @classmethod
    def from_envelope(cls, payload: Dict[str, Any]) -> "Page[T]":
        data = payload.get("data") or {}
        if isinstance(data, list):
            data = {"data": data, "total": len(data)}
        metadata = payload.get("metadata") or {}
        return cls.model_validate({**data, "pagination": metadata.get("pagination")})


class QueryFilters(AdminModel):
    """Base for list filters that are passed through to the backend as query params."""

    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1)

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


__all__ = ["AdminModel", "Page", "Pagination", "QueryFilters", "SortOrder"]
