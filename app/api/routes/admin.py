from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_contact_repository, get_current_admin
from app.core.errors import NotFoundError, PersistenceError
from app.schemas.contact import ContactResponse
from app.services.database.contact_repository import ContactRepository

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])

MESSAGE_LIST_LIMIT = 50


@router.get("/messages", response_model=List[ContactResponse])
def get_messages(repository: ContactRepository = Depends(get_contact_repository)):
    """Most recent contact messages, newest first (Admin only)"""
    try:
        return repository.list_recent(limit=MESSAGE_LIST_LIMIT)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to fetch messages")


@router.patch("/messages/{message_id}/read")
def mark_message_read(message_id: int, repository: ContactRepository = Depends(get_contact_repository)):
    try:
        repository.mark_read(message_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Message not found")
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to update message")
    return {"success": True, "message": "Message marked as read"}
