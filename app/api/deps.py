from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.auth import verify_token
from app.core.database import SessionLocal, get_db
from app.models.admin import Admin
from app.services.contact_service import ContactPipeline
from app.services.database.contact_repository import ContactRepository
from app.services.sender_cache import SenderHolder


def get_current_admin(payload: dict = Depends(verify_token), db: Session = Depends(get_db)) -> Admin:
    try:
        admin_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    admin = db.get(Admin, admin_id)
    if not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return admin


def get_contact_repository() -> ContactRepository:
    return ContactRepository(SessionLocal)


def get_sender_holder(request: Request) -> SenderHolder:
    return request.app.state.sender_holder


def get_contact_pipeline(
    repository: ContactRepository = Depends(get_contact_repository),
    sender_holder: SenderHolder = Depends(get_sender_holder),
) -> ContactPipeline:
    return ContactPipeline(repository, sender_holder)
