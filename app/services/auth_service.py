# app/services/auth_service.py
import logging
from typing import List, Optional

from app.core.exceptions import AuthenticationError, NotFoundError
from app.core.security import create_access_token, hash_password, verify_password
from app.schemas.user import AuthResponse, UserCreate, UserInDB, UserOut, UserUpdate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, storage):
        self.storage = storage

    def register(self, payload: UserCreate) -> UserInDB:
        data = payload.model_dump(exclude={"password"})
        data["email"] = payload.email.lower()
        data["password_hash"] = hash_password(payload.password)

        # police officers without a station code get the first station in their city
        if payload.role == "police" and payload.city and not payload.police_station_code:
            stations = self.storage.list_police_stations(city=payload.city)
            if stations:
                data["police_station_code"] = stations[0].code
                logger.info("Auto-assigned station %s to officer %s", stations[0].code, data["email"])
            else:
                logger.warning("No police stations found for city %s", payload.city)

        user = self.storage.create_user(data)
        logger.info("Registered %s user %s", user.role, user.email)
        return user

    def login(self, email: str, password: str) -> AuthResponse:
        user = self.storage.get_user_by_email(email)
        if user is None:
            raise AuthenticationError("User not found")
        if not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid password")
        token = create_access_token(user.id, user.email, user.role)
        return AuthResponse(user=UserOut.model_validate(user.model_dump()), token=token)

    def list_users(self, role: Optional[str] = None) -> List[UserInDB]:
        return self.storage.list_users(role=role)

    def update_profile(self, user_id: str, payload: UserUpdate) -> UserInDB:
        changes = payload.model_dump(exclude_unset=True)
        user = self.storage.update_user(user_id, changes) if changes else self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def change_password(self, user_id: str, current_password: str, new_password: str):
        user = self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect", status_code=400)
        self.storage.update_user(user_id, {"password_hash": hash_password(new_password)})
        logger.info("Password changed for user %s", user_id)
