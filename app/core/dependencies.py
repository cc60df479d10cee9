# app/core/dependencies.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security import decode_access_token
from app.db.session import SessionLocal, engine
from app.schemas.user import UserInDB
from app.services.email_service import EmailService
from app.storage import MemoryStorage, SqlStorage, StorageManager

storage_manager = StorageManager(
    SqlStorage(SessionLocal, engine),
    MemoryStorage(),
    mode=settings.STORAGE_BACKEND,
)
mailer = EmailService(settings)

bearer_scheme = HTTPBearer(auto_error=False)


def get_storage():
    return storage_manager


def get_mailer():
    return mailer


def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    storage=Depends(get_storage),
) -> UserInDB:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
    payload = decode_access_token(creds.credentials)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    user = storage.get_user(payload["sub"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def require_role(*roles: str):
    def checker(current_user: UserInDB = Depends(get_current_user)) -> UserInDB:
        if current_user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user

    return checker


require_client = require_role("client")
require_lawyer = require_role("lawyer")
require_police = require_role("police")
