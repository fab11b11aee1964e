from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing_api.db.models import Contact
from landing_api.models.schemas import ContactRequest

logger = logging.getLogger(__name__)


class ContactStorageError(RuntimeError):
    """The contact submission could not be written."""


def _as_text(value: str | int | float | bool | None) -> str | None:
    return None if value is None else str(value)


def insert_contact(db: Session, submission: ContactRequest) -> int:
    """Append a contact row exactly as submitted and return its id."""

    contact = Contact(
        name=_as_text(submission.name),
        email=_as_text(submission.email),
        telephone=_as_text(submission.telephone),
        city=_as_text(submission.city),
        interest=_as_text(submission.interest),
    )
    try:
        db.add(contact)
        db.commit()
        db.refresh(contact)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("failed to store contact submission")
        raise ContactStorageError("contact submission could not be stored") from exc

    logger.info("stored contact submission id=%s", contact.id)
    return contact.id
