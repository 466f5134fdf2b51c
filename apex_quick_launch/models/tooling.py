"""Pydantic models for Tooling API sObject records and responses."""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from apex_quick_launch.models.base import SObjectModel


class QueryResult(BaseModel):
    """Response from a SOQL query."""

    total_size: int = Field(..., alias="totalSize")
    done: bool
    records: Sequence[Mapping[str, Any]]


class TraceFlagRecord(SObjectModel):
    """A trace flag enabling debug logs for a user."""

    id: str
    log_type: str
    debug_level_id: str
    start_date: datetime | None = None
    expiration_date: datetime


class SaveResult(BaseModel):
    """Response from creating an sObject record."""

    id: str
    success: bool
    errors: Sequence[Any] = Field(default_factory=list)
