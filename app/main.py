# app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from app.api.api_router import api_router
from app.core.config import settings
from app.core.dependencies import storage_manager
from app.core.exceptions import AppError
from app.db import init_db
from app.schemas.common import HealthOut
import logging
from app.core.logging import configure_logging
import os

configure_logging()

app = FastAPI(title=settings.PROJECT_NAME, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
# mount
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

app.include_router(api_router, prefix="/api")


@app.exception_handler(AppError)
def handle_app_error(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/api/health", response_model=HealthOut, tags=["health"])
def health():
    return {"status": "ok", "storage": storage_manager.backend_name}


@app.on_event("startup")
def on_startup():
    logging.info("Starting up: initializing storage...")
    init_db.init_storage(storage_manager)
    logging.info("Startup complete")
