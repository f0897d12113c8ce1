# /eduguide/main.py

# --- Core FastAPI Imports ---
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import get_settings
from .db.base import Base
from .db.database import SessionLocal, engine
from .routers import (
    auth_router,
    admin_router,
    students_router,
    suggestions_router,
    dashboard_router,
)
from .services import user_service
from .services.database_service import DatabaseService
from .services.gemini_service import GeminiGateway

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables if they don't exist yet.
    Base.metadata.create_all(bind=engine)
    os.makedirs(settings.upload_dir, exist_ok=True)
    with SessionLocal() as session:
        if user_service.seed_admin(DatabaseService(db_session=session), settings):
            logger.info("Seeded administrator %s", settings.admin_email)
    app.state.gemini_gateway = GeminiGateway(settings)
    logger.info("EduGuide backend started (gemini configured: %s)", settings.gemini_configured)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="EduGuide Backend API",
    description="Student-progress tracking with CSV roster import and AI teaching suggestions.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last line of defence: anything a router did not convert becomes a JSON 500."""
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected server error occurred."},
    )


# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])
app.include_router(suggestions_router.router, prefix="/api/suggestions", tags=["Teaching Suggestions"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "EduGuide backend is running!", "version": app.version}
