"""
Safety Hub - FastAPI Application Entry Point

Backend for a personal safety reporting app: users file incident
complaints with evidence and location and keep a list of trusted
contacts; admins review complaints and update their status.

DESIGN PRINCIPLES:
- Firebase owns accounts, complaint records and evidence files
- Local state (admin flag, trusted contacts, auth session) is loaded at
  startup and saved at shutdown
- Every failure comes back as a notification; nothing retries on its own
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from safety_hub.config.firebase import initialize_firebase
from safety_hub.core.exceptions import SafetyHubError
from safety_hub.core.settings import settings
from safety_hub.models.base import Notification
from safety_hub.routes import admin, auth, contacts, dashboard, health
from safety_hub.services.local_store import get_local_store
from safety_hub.services.session_store import get_session_store

logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Incident reporting, trusted contacts and complaint moderation",
    debug=settings.DEBUG
)


@app.exception_handler(SafetyHubError)
async def safety_hub_exception_handler(request: Request, exc: SafetyHubError):
    """Domain errors become a status code plus a toast for the browser."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "notification": Notification.error(exc.message, title=exc.title).model_dump(mode="json"),
        }
    )


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {str(exc)}"}
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Catch Pydantic validation errors and log them."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc)}
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


# CORS - only the configured browser origins may call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Initialize services on application startup:
    logging, Firebase, persisted local state.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        initialize_firebase()
    except Exception as e:
        logger.warning(f"Firebase initialization failed: {e}")
        logger.warning("The app will start but database operations may fail.")

    session = get_session_store()
    logger.info(f"Session restored: view={session.resolve_view().value}")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Persist local state on application shutdown.
    """
    try:
        get_local_store().save()
    except OSError as e:
        logger.error(f"Could not save local state: {e}")
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(contacts.router)
app.include_router(admin.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "session": "/auth/session"
    }
