import logging
from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlmodel import Session, select

from app.domain.errors import InvalidIdentifier, InvalidStatus, MissingRequiredField, NotFound, ValidationError
from app.domain.models import Bug, utcnow
from app.domain.schemas import BugFields, BugRead, BugSource, BugStatus, Comment, StatusChange, field_errors

logger = logging.getLogger("bug_service")

# SQLite INTEGER is a signed 64-bit value
MAX_ID = 2**63 - 1

FILTER_FIELDS = {
    "status": Bug.status,
    "priority": Bug.priority,
    "source": Bug.source,
    "assigned_to": Bug.assigned_to,
}

SORT_FIELDS = {
    "createdAt": Bug.created_at,
    "updatedAt": Bug.updated_at,
    "title": Bug.title,
    "priority": Bug.priority,
    "status": Bug.status,
    "reportedBy": Bug.reported_by,
    "assignedTo": Bug.assigned_to,
    "source": Bug.source,
}


def _build(model: type[BaseModel], data: dict[str, Any]):
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(field_errors(e)) from e


def _to_columns(fields: BugFields) -> dict[str, Any]:
    columns = fields.model_dump(mode="json", exclude={"customer"})
    if fields.source == BugSource.CUSTOMER:
        columns["customer"] = fields.customer.model_dump(mode="json") if fields.customer else {}
    else:
        columns["customer"] = None
    return columns


def _history_entry(previous: str | None, new: str, by: str | None, reason: str | None = None) -> dict[str, Any]:
    entry = _build(StatusChange, {"from": previous, "to": new, "by": by or "system", "at": utcnow(), "reason": reason})
    return entry.model_dump(mode="json", by_alias=True)


def parse_bug_id(raw) -> int:
    text = str(raw)
    if not (text.isascii() and text.isdigit()):
        raise InvalidIdentifier(raw)
    bug_id = int(text)
    if bug_id <= 0 or bug_id > MAX_ID:
        raise InvalidIdentifier(raw)
    return bug_id


def create_bug(session: Session, **fields) -> Bug:
    data = {k: v for k, v in fields.items() if v is not None}
    validated = _build(BugFields, data)

    bug = Bug(**_to_columns(validated))
    session.add(bug)
    session.commit()
    session.refresh(bug)
    logger.info("bug created id=%s priority=%s source=%s", bug.id, bug.priority, bug.source)
    return bug


def create_feedback_bug(
    session: Session,
    title: str,
    description: str,
    customer_name: str,
    customer_email: str | None = None,
    customer_id: str | None = None,
    priority: str | None = None,
) -> Bug:
    return create_bug(
        session,
        title=title,
        description=description,
        priority=priority,
        reported_by=customer_name,
        source=BugSource.CUSTOMER.value,
        customer={"name": customer_name, "email": customer_email, "id": customer_id},
    )


def get_bug(session: Session, bug_id) -> Bug:
    bug = session.get(Bug, parse_bug_id(bug_id))
    if not bug:
        raise NotFound(bug_id)
    return bug


def list_bugs(
    session: Session,
    status: str | None = None,
    priority: str | None = None,
    source: str | None = None,
    assigned_to: str | None = None,
    sort_by: str = "createdAt",
    order: str = "desc",
) -> list[Bug]:
    column = SORT_FIELDS.get(sort_by)
    if column is None:
        raise ValidationError([{"field": "sortBy", "message": f"Cannot sort by '{sort_by}'"}])

    filters = {"status": status, "priority": priority, "source": source, "assigned_to": assigned_to}
    q = select(Bug)
    for name, value in filters.items():
        if value:
            q = q.where(FILTER_FIELDS[name] == value)

    if order == "desc":
        q = q.order_by(column.desc(), Bug.id.desc())
    else:
        q = q.order_by(column.asc(), Bug.id.asc())
    return session.exec(q).all()


def replace_bug(session: Session, bug_id, fields: dict[str, Any], updated_by: str | None = None) -> Bug:
    """Overwrite the supplied fields, logging a status change when the status moves."""
    bug = get_bug(session, bug_id)

    merged = {name: getattr(bug, name) for name in BugFields.model_fields}
    merged.update(fields)
    if merged.get("assigned_to") is None:
        merged["assigned_to"] = ""
    validated = _build(BugFields, merged)

    previous = bug.status
    for name, value in _to_columns(validated).items():
        setattr(bug, name, value)

    if bug.status != previous:
        bug.status_history = [*bug.status_history, _history_entry(previous, bug.status, by=updated_by)]

    bug.updated_at = utcnow()
    session.add(bug)
    session.commit()
    session.refresh(bug)
    logger.info("bug updated id=%s status=%s", bug.id, bug.status)
    return bug


def set_status(session: Session, bug_id, status: str, reason: str | None = None, by: str | None = None) -> Bug:
    try:
        new_status = BugStatus(status)
    except ValueError:
        raise InvalidStatus(status) from None

    bug = get_bug(session, bug_id)
    entry = _history_entry(bug.status, new_status.value, by=by, reason=reason)
    logger.info("bug id=%s status %s -> %s", bug.id, bug.status, new_status.value)

    bug.status = new_status.value
    bug.status_history = [*bug.status_history, entry]
    bug.updated_at = utcnow()
    session.add(bug)
    session.commit()
    session.refresh(bug)
    return bug


def add_comment(session: Session, bug_id, author: str | None, message: str | None) -> Comment:
    missing = [name for name, value in (("author", author), ("message", message)) if not (value or "").strip()]
    if missing:
        raise MissingRequiredField(missing, "author and message are required")

    bug = get_bug(session, bug_id)
    comment = _build(Comment, {"author": author, "message": message, "created_at": utcnow()})

    bug.comments = [*bug.comments, comment.model_dump(mode="json", by_alias=True)]
    bug.updated_at = utcnow()
    session.add(bug)
    session.commit()
    logger.info("comment added to bug id=%s by %s", bug.id, comment.author)
    return comment


def delete_bug(session: Session, bug_id) -> BugRead:
    """Delete a bug and return a snapshot of it (the row is gone once committed)."""
    bug = get_bug(session, bug_id)
    snapshot = BugRead.model_validate(bug)
    session.delete(bug)
    session.commit()
    logger.info("bug deleted id=%s", snapshot.id)
    return snapshot
