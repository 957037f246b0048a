import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from database import SessionLocal
from routers import (
    assets,
    auth,
    categories,
    classification,
    departments,
    notifications,
    statuses,
    tickets,
    users,
)
from seeder.status import seed_statuses
from services.user_service import UserService
from utils.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)


def seed_defaults() -> None:
    """Make sure the default statuses and admin account exist."""
    db = SessionLocal()
    try:
        seed_statuses(db, settings.default_statuses)
        UserService.ensure_default_admin(
            db,
            name=settings.default_admin_name,
            password=settings.default_admin_password,
            department=settings.default_admin_department,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(
            f"⚠ Could not seed defaults ({e}). "
            "Run `alembic upgrade head` first."
        )
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("✓ Application startup")
    if settings.seed_on_startup:
        seed_defaults()

    yield

    logger.info("✓ Application shutdown")


app = FastAPI(
    title="Maintenance Ticketing API",
    version="1.0.0",
    description="API for the campus maintenance ticketing system",
    redoc_url="/api/redoc",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(departments.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(assets.router, prefix="/api")
app.include_router(statuses.router, prefix="/api")
app.include_router(classification.router, prefix="/api")
app.include_router(tickets.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")


# Health check endpoint
@app.get("/api/health-check", tags=["health-check"])
def read_root():
    return {"Status": "OK"}
