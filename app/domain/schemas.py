from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


def wire_name(part) -> str:
    """JSON name of a field path segment (reported_by -> reportedBy, from_ -> from)."""
    part = str(part)
    return to_camel(part) if "_" in part.strip("_") else part.strip("_")


def field_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a pydantic error into [{field, message}] using the JSON field names."""
    errors = []
    for err in exc.errors():
        field = ".".join(wire_name(p) for p in err["loc"]) or "body"
        errors.append({"field": field, "message": err["msg"]})
    return errors


class BugStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class BugPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class BugSource(str, Enum):
    INTERNAL = "internal"
    CUSTOMER = "customer"


class CamelModel(BaseModel):
    # JSON uses camelCase (reportedBy, statusHistory...), Python keeps snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Embedded documents ---

class CustomerInfo(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    email: Optional[str] = None
    id: Optional[str] = None


class Comment(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    author: str = Field(min_length=1)
    message: str = Field(min_length=1, max_length=2000)
    created_at: datetime


class StatusChange(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    from_: Optional[str] = Field(default=None, alias="from")
    to: str
    by: Optional[str] = None
    at: datetime
    reason: Optional[str] = Field(default=None, max_length=500)


# --- Write-time validation of a whole record ---

class BugFields(CamelModel):
    """Every user-writable field of a bug, with the constraints enforced on each write."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    priority: BugPriority = BugPriority.MEDIUM
    status: BugStatus = BugStatus.OPEN
    reported_by: str = Field(min_length=1, max_length=50)
    assigned_to: str = ""
    source: BugSource = BugSource.INTERNAL
    customer: Optional[CustomerInfo] = None


# --- Request payloads (presence is checked by the routers, constraints by the store) ---

class BugCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    priority: str | None = None
    reported_by: str | None = None
    assigned_to: str | None = None
    source: str | None = None
    customer: CustomerInfo | None = None


class BugUpdate(CamelModel):
    # id, createdAt, comments and statusHistory are not writable through an update
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    reported_by: str | None = None
    assigned_to: str | None = None
    source: str | None = None
    customer: CustomerInfo | None = None
    updated_by: str | None = None


class StatusUpdate(CamelModel):
    status: str | None = None
    reason: str | None = None
    by: str | None = None


class CommentCreate(CamelModel):
    author: str | None = None
    message: str | None = None


class FeedbackCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_id: str | None = None
    priority: str | None = None


# --- Responses ---

class BugRead(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    priority: str
    status: str
    reported_by: str
    assigned_to: str = ""
    source: str
    customer: Optional[CustomerInfo] = None
    comments: list[Comment] = Field(default_factory=list)
    status_history: list[StatusChange] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    count: Optional[int] = None
