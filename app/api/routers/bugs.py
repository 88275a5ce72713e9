import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from pydantic import BaseModel
from sqlmodel import Session

from app.api.deps import NotifierDep, SessionDep
from app.domain.errors import MissingRequiredField
from app.domain.schemas import (
    BugCreate, BugRead, BugUpdate, Comment, CommentCreate, Envelope, FeedbackCreate, StatusUpdate
)
from app.services.bug_service import (
    add_comment, create_bug, create_feedback_bug, delete_bug, get_bug, list_bugs, replace_bug, set_status
)
from app.services.notifier import WebhookNotifier, format_bug_created, format_feedback_created

logger = logging.getLogger("bugs_router")
router = APIRouter(prefix="/api/bugs", tags=["Bugs"])


def _require(payload: BaseModel, *names: str, message: str) -> None:
    missing = [
        type(payload).model_fields[n].alias or n
        for n in names
        if not (getattr(payload, n) or "").strip()
    ]
    if missing:
        logger.info("missing required fields: %s", missing)
        raise MissingRequiredField(missing, message)


@router.post("", status_code=201, response_model=Envelope[BugRead], response_model_exclude_none=True)
def post_bug(
    payload: BugCreate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(SessionDep),
    notifier: WebhookNotifier = Depends(NotifierDep),
):
    _require(payload, "title", "description", "reported_by",
             message="Title, description, and reportedBy are required fields")

    bug = create_bug(session, **payload.model_dump())
    if notifier.enabled:
        background_tasks.add_task(notifier.send, format_bug_created(bug))

    return Envelope[BugRead](data=BugRead.model_validate(bug), message="Bug created successfully")


@router.get("", response_model=Envelope[list[BugRead]], response_model_exclude_none=True)
def get_bugs(
    status: str | None = None,
    priority: str | None = None,
    source: str | None = None,
    assigned_to: str | None = Query(default=None, alias="assignedTo"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    order: str = "desc",
    session: Session = Depends(SessionDep),
):
    bugs = list_bugs(
        session,
        status=status,
        priority=priority,
        source=source,
        assigned_to=assigned_to,
        sort_by=sort_by,
        order=order,
    )
    data = [BugRead.model_validate(b) for b in bugs]
    return Envelope[list[BugRead]](data=data, count=len(data))


@router.post("/feedback", status_code=201, response_model=Envelope[BugRead], response_model_exclude_none=True)
def post_feedback(
    payload: FeedbackCreate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(SessionDep),
    notifier: WebhookNotifier = Depends(NotifierDep),
):
    _require(payload, "title", "description", "customer_name",
             message="title, description, and customerName are required")

    bug = create_feedback_bug(session, **payload.model_dump())
    if notifier.enabled:
        background_tasks.add_task(notifier.send, format_feedback_created(bug))

    return Envelope[BugRead](data=BugRead.model_validate(bug), message="Feedback captured as bug")


@router.get("/{bug_id}", response_model=Envelope[BugRead], response_model_exclude_none=True)
def get_one_bug(bug_id: str, session: Session = Depends(SessionDep)):
    return Envelope[BugRead](data=BugRead.model_validate(get_bug(session, bug_id)))


@router.put("/{bug_id}", response_model=Envelope[BugRead], response_model_exclude_none=True)
def put_bug(bug_id: str, payload: BugUpdate, session: Session = Depends(SessionDep)):
    fields = payload.model_dump(exclude_unset=True, exclude={"updated_by"})
    bug = replace_bug(session, bug_id, fields, updated_by=payload.updated_by)
    return Envelope[BugRead](data=BugRead.model_validate(bug), message="Bug updated successfully")


@router.delete("/{bug_id}", response_model=Envelope[BugRead], response_model_exclude_none=True)
def remove_bug(bug_id: str, session: Session = Depends(SessionDep)):
    return Envelope[BugRead](data=delete_bug(session, bug_id), message="Bug deleted successfully")


@router.patch("/{bug_id}/status", response_model=Envelope[BugRead], response_model_exclude_none=True)
def patch_status(bug_id: str, payload: StatusUpdate, session: Session = Depends(SessionDep)):
    _require(payload, "status", message="Status is required")
    bug = set_status(session, bug_id, payload.status, reason=payload.reason, by=payload.by)
    return Envelope[BugRead](data=BugRead.model_validate(bug), message="Bug status updated successfully")


@router.post("/{bug_id}/comments", status_code=201, response_model=Envelope[Comment],
             response_model_exclude_none=True)
def post_comment(bug_id: str, payload: CommentCreate, session: Session = Depends(SessionDep)):
    _require(payload, "author", "message", message="author and message are required")
    comment = add_comment(session, bug_id, payload.author, payload.message)
    return Envelope[Comment](data=comment, message="Comment added")
