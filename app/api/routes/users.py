# app/api/routes/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_storage, require_police
from app.schemas.user import Role, UserOut, UserUpdate
from app.services.auth_service import AuthService

router = APIRouter()


@router.get("", response_model=List[UserOut])
def list_users(role: Optional[Role] = None, storage=Depends(get_storage), _=Depends(require_police)):
    svc = AuthService(storage)
    return svc.list_users(role=role)


@router.patch("/me", response_model=UserOut)
def update_me(payload: UserUpdate, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = AuthService(storage)
    return svc.update_profile(current_user.id, payload)
