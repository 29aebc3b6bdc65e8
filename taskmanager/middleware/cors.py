"""CORS configuration for browser clients of the Task Manager API."""
from typing import List
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.config import Settings

logger = logging.getLogger(__name__)

# Base allowed origins for development
DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def allowed_origins(settings: Settings) -> List[str]:
    if settings.environment == "production":
        return [settings.frontend_url] if settings.frontend_url else []
    origins = list(DEV_ORIGINS)
    if settings.frontend_url and settings.frontend_url not in origins:
        origins.append(settings.frontend_url)
    return origins


def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    """Add CORS middleware. Credentials are allowed so the session cookie travels."""
    origins = allowed_origins(settings)
    logger.info(f"CORS ({settings.environment}) allowed origins: {origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
