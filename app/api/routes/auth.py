import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth import create_access_token, get_password_hash, verify_password
from app.core.config import settings
from app.core.database import get_db
from app.models.admin import Admin
from app.schemas.auth import AdminLogin, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["authentication"])


def _bootstrap_default_admin(db: Session, email: str) -> Admin:
    """Create the admin configured by ADMIN_EMAIL / ADMIN_PASSWORD on its first login."""
    logger.info(f"Creating default admin {email}")
    admin = Admin(email=email, hashed_password=get_password_hash(settings.ADMIN_PASSWORD))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@router.post("/login", response_model=LoginResponse)
def login(credentials: AdminLogin, db: Session = Depends(get_db)):
    email = credentials.email.lower()
    admin = db.query(Admin).filter(Admin.email == email).first()

    if admin is None and settings.ADMIN_PASSWORD and email == settings.ADMIN_EMAIL.lower():
        admin = _bootstrap_default_admin(db, email)

    if admin is None or not verify_password(credentials.password, admin.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(data={"sub": str(admin.id), "email": admin.email})
    return {"success": True, "token": token, "token_type": "bearer"}
