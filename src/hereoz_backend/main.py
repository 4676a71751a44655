"""FastAPI application for the Hereoz recruiting marketplace."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from hereoz_backend.api.admin import router as admin_router
from hereoz_backend.api.applications import router as applications_router
from hereoz_backend.api.auth import router as auth_router
from hereoz_backend.api.availability import router as availability_router, stats_router
from hereoz_backend.api.conversations import router as conversations_router
from hereoz_backend.api.interviews import router as interviews_router
from hereoz_backend.api.matches import router as matches_router
from hereoz_backend.api.offers import companies_router, router as offers_router
from hereoz_backend.api.profile import router as profile_router
from hereoz_backend.core.config import settings
from hereoz_backend.core.database import close_db, db_manager, init_db
from hereoz_backend.core.error_handling import register_exception_handlers
from hereoz_backend.core.logging import configure_logging
from hereoz_backend.core.middleware import RequestContextMiddleware

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.run_migrations_on_startup:
        init_db()
    else:
        db_manager.initialize()
    logger.info("Hereoz API started", environment=settings.environment)
    yield
    close_db()
    logger.info("Hereoz API stopped")


app = FastAPI(
    title="Hereoz API",
    description="Recruiting marketplace: swipe feed, applications, messaging and interviews",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(companies_router)
app.include_router(offers_router)
app.include_router(matches_router)
app.include_router(applications_router)
app.include_router(conversations_router)
app.include_router(interviews_router)
app.include_router(availability_router)
app.include_router(stats_router)
app.include_router(admin_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    database_ok = db_manager.health_check()
    return {
        "data": {
            "status": "healthy" if database_ok else "degraded",
            "database": "up" if database_ok else "down",
            "service": "hereoz-backend",
            "environment": settings.environment,
        },
        "message": None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("hereoz_backend.main:app", host=settings.api_host, port=settings.api_port)
