from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from landing_api.db.session import get_db
from landing_api.models.schemas import ContactRequest, ContactResponse
from landing_api.services.contact_service import ContactStorageError, insert_contact

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=ContactResponse, status_code=201)
async def submit_contact(payload: ContactRequest, db: Session = Depends(get_db)) -> ContactResponse:
    try:
        contact_id = insert_contact(db=db, submission=payload)
    except ContactStorageError as exc:
        raise HTTPException(status_code=500, detail="Failed to store contact") from exc
    return ContactResponse(id=contact_id)
