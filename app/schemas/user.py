# app/schemas/user.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

Role = Literal["client", "lawyer", "police"]


class UserStats(BaseModel):
    total_cases: int = 0
    won_cases: int = 0
    lost_cases: int = 0


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: str = Field(..., min_length=5, max_length=20)
    role: Role
    city: Optional[str] = None
    specialization: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0)
    police_station_code: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=5, max_length=20)
    city: Optional[str] = None
    specialization: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "phone")
    @classmethod
    def not_null(cls, value):
        # may be omitted, but a stored user always has both
        if value is None:
            raise ValueError("must not be null")
        return value


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    role: Role
    city: Optional[str] = None
    specialization: Optional[List[str]] = None
    experience: Optional[int] = None
    police_station_code: Optional[str] = None
    stats: Optional[UserStats] = None
    rating: Optional[float] = 0
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserInDB(UserOut):
    password_hash: str


class LawyerOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    specialization: List[str] = []
    city: str = ""
    experience: int = 0
    rating: float = 0
    stats: UserStats = UserStats()
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: UserOut) -> "LawyerOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            specialization=user.specialization or [],
            city=user.city or "",
            experience=user.experience or 0,
            rating=user.rating or 0,
            stats=user.stats or UserStats(),
            description=user.description,
            image=user.image,
            created_at=user.created_at,
        )


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    user: UserOut
    token: str
