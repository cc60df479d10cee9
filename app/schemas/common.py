# app/schemas/common.py
from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class HealthOut(BaseModel):
    status: str
    storage: str
