# app/api/api_router.py
from fastapi import APIRouter
from app.api.routes import (
    auth,
    case_requests,
    cases,
    dashboard,
    documents,
    lawyers,
    messages,
    notifications,
    police_stations,
    users,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(lawyers.router, prefix="/lawyers", tags=["lawyers"])
api_router.include_router(police_stations.router, prefix="/police-stations", tags=["police-stations"])
api_router.include_router(cases.router, prefix="/cases", tags=["cases"])
api_router.include_router(case_requests.router, prefix="/case-requests", tags=["case-requests"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
