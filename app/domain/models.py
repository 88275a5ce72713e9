from __future__ import annotations

from typing import Any, Optional
from datetime import datetime, timezone

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Bug(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    title: str = Field(max_length=100)
    description: str = Field(max_length=1000)

    priority: str = Field(default="Medium", index=True)
    status: str = Field(default="Open", index=True)

    reported_by: str = Field(max_length=50)
    assigned_to: str = Field(default="", index=True)
    source: str = Field(default="internal", index=True)

    # Embedded documents: the customer sub-record and the two append-only logs
    customer: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    comments: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status_history: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow, index=True)
