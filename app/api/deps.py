from fastapi import Request
from sqlmodel import Session

from app.db.engine import engine
from app.services.notifier import WebhookNotifier


def get_session():
    with Session(engine) as session:
        yield session


def get_notifier(request: Request) -> WebhookNotifier:
    return request.app.state.notifier


SessionDep = get_session
NotifierDep = get_notifier
