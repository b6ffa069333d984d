"""Pydantic schemas for allocation counts and management payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CountEntry(BaseModel):
    """Number of weak references created for one referent type."""

    model_config = {"frozen": True}

    type_key: str = Field(..., min_length=1)
    count: int = Field(..., ge=0)


class TrackerAttributes(BaseModel):
    """Readable attributes of a published tracker."""

    enabled: bool
    stackdump_interval: int = Field(..., ge=1)


class EnabledUpdate(BaseModel):
    value: bool


class IntervalUpdate(BaseModel):
    """New stack dump interval; values below one are clamped by the tracker."""

    value: int


class DumpReport(BaseModel):
    """Rendered report plus the entries it was built from, in report order."""

    order: Literal["name", "count"]
    text: str
    entries: list[CountEntry]
