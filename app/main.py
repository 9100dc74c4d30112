"""
StudyMate Application Entry Point

FastAPI application serving the study-partner matching prototype:
landing content, mock sign-in, profile setup wizard and matches dashboard.
"""

from contextlib import asynccontextmanager
import logging
import sys
import os
from datetime import datetime
from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.config import Settings, get_settings
from app.middleware.rate_limit import RateLimitMiddleware
from app.db.store import init_store, close_store, is_initialized
from app.startup.seed_candidates import check_candidate_fixture
from app.models.schemas import HealthResponse, LandingPage
from app.services.landing_service import get_landing_page
from app.utils.errors import (
    AuthenticationError,
    CandidateNotFoundError,
    CandidateStatusError,
    ConfigurationError,
    InvalidTransitionError,
    ProfileSaveError,
    SessionNotFoundError,
    StudyMateError,
    WizardValidationError,
)

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)

_candidates_count = 0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager

    Creates the in-memory session store and checks the candidate fixture;
    on shutdown every open page session is closed.
    """
    global _candidates_count
    settings: Settings = get_settings()

    try:
        settings.validate_required()
        logger.info("✅ Configuration validated")
    except ConfigurationError as e:
        logger.error(f"❌ Configuration validation failed: {e}")
        if settings.app_env == "production":
            raise  # Fail fast in production
        else:
            logger.warning("⚠️ Continuing with invalid config (development mode)")

    logger.info("🚀 Starting StudyMate...")

    await init_store()
    logger.info("✅ Session store ready")

    try:
        _candidates_count = check_candidate_fixture(settings.candidates_fixture_path)
    except ValueError as e:
        logger.error(f"❌ Candidate fixture is invalid: {e}")
        if settings.app_env == "production":
            raise

    logger.info("✅ Application ready!")

    try:
        yield
    finally:
        logger.info("🛑 Shutting down...")
        await close_store()
        logger.info("✅ Shutdown complete")


app = FastAPI(
    title="StudyMate API",
    description="Study-partner matching: sign-in, profile setup and matches dashboard",
    version="1.0.0",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

settings = get_settings()
cors_origins = settings.get_cors_origins_list()

if "*" in cors_origins:
    logger.warning("⚠️ CORS allows all origins - not recommended for production!")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    RateLimitMiddleware,
    requests_per_window=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window
)


_ERROR_STATUS: dict[type[StudyMateError], int] = {
    SessionNotFoundError: 404,
    CandidateNotFoundError: 404,
    InvalidTransitionError: 409,
    CandidateStatusError: 409,
    WizardValidationError: 400,
    AuthenticationError: 502,
    ProfileSaveError: 502,
}


@app.exception_handler(StudyMateError)
async def studymate_handler(request: Request, exc: StudyMateError):
    status_code = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    if status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}", exc_info=exc)
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_handler(request: Request, exc: Exception):
    logger.error(f"Global error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(status="ok", time=datetime.utcnow().isoformat())


@app.get("/ready")
async def ready():
    """Readiness: session store created and candidates available"""
    store_ready = is_initialized()
    return {
        "ready": store_ready and _candidates_count > 0,
        "store_initialized": store_ready,
        "candidates_count": _candidates_count,
        "time": datetime.utcnow().isoformat()
    }


@app.get("/", response_model=LandingPage)
async def root() -> LandingPage:
    """Landing page content"""
    return get_landing_page()


from app.routers.sessions import router as sessions_router
from app.routers.auth import router as auth_router
from app.routers.profile import router as profile_router
from app.routers.match import router as match_router
from fastapi import APIRouter

api_v1 = APIRouter(prefix="/v1")

api_v1.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
api_v1.include_router(auth_router, prefix="/auth", tags=["auth"])
api_v1.include_router(profile_router, prefix="/profile", tags=["profile"])
api_v1.include_router(match_router, prefix="/match", tags=["match"])

app.include_router(api_v1)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.port,
        reload=os.getenv("APP_ENV", "development") == "development"
    )
