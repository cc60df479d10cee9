# app/api/routes/auth.py
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_storage
from app.schemas.common import MessageResponse
from app.schemas.user import AuthResponse, LoginRequest, PasswordChange, UserCreate, UserOut
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, storage=Depends(get_storage)):
    svc = AuthService(storage)
    return svc.register(payload)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, storage=Depends(get_storage)):
    svc = AuthService(storage)
    return svc.login(payload.email, payload.password)


@router.get("/me", response_model=UserOut)
def me(current_user=Depends(get_current_user)):
    return current_user


@router.post("/change-password", response_model=MessageResponse)
def change_password(payload: PasswordChange, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = AuthService(storage)
    svc.change_password(current_user.id, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}
