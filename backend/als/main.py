import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from als import __version__
from als.config import settings
from als.database import create_cloud_tables, dispose_engine, is_cloud_configured
from als.deps import close_storage
from als.middleware.exceptions import register_exception_handlers
from als.routers import (
    backup,
    categories,
    customers,
    drivers,
    forms,
    health,
    ports,
    pre_stacking,
    preferences,
    staff,
    system,
    trips,
    users,
)

logger = logging.getLogger("als.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if is_cloud_configured():
        try:
            await create_cloud_tables()
            logger.info("Cloud tables ready")
        except (SQLAlchemyError, OSError) as e:
            # Start local-only; the facade reports the cloud as offline
            logger.warning(f"Cloud database unreachable at startup: {e}")
    else:
        logger.info("No cloud database configured, running local-only")
    yield
    await close_storage()
    await dispose_engine()


app = FastAPI(
    title="ALS",
    description="Container trucking back office: registries, trips, forms and payments",
    version=__version__,
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)

# Registries
app.include_router(drivers.router, prefix="/api/drivers", tags=["drivers"])
app.include_router(customers.router, prefix="/api/customers", tags=["customers"])
app.include_router(ports.router, prefix="/api/ports", tags=["ports"])
app.include_router(pre_stacking.router, prefix="/api/pre-stacking", tags=["pre-stacking"])
app.include_router(staff.router, prefix="/api/staff", tags=["staff"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(categories.router, prefix="/api/categories", tags=["categories"])

# Operations
app.include_router(trips.router, prefix="/api/trips", tags=["trips"])
app.include_router(forms.router, prefix="/api/forms", tags=["forms"])

# Back office
app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
app.include_router(backup.router, prefix="/api/backup", tags=["backup"])
app.include_router(system.router, prefix="/api/system", tags=["system"])
