"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careerconnect.core.database import init_db
from careerconnect.core.logging_config import get_logger, setup_logging
from careerconnect.core.monitoring import initialize_logfire

from .api.v1 import (
    addresses,
    applications,
    auth,
    companies,
    distribusi,
    health,
    hewan,
    images,
    info_fields,
    itikaf,
    jobs,
    keuangan,
    kupon,
    mudhohi,
    ocr,
    products,
    profiles,
    regions,
    settings,
    users,
    youtube,
)
from .core import constant
from .core.config import settings as app_settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup. A failure is logged so the health
    endpoint can still report the degraded database.
    """
    # Startup
    try:
        logger.info("Starting up CareerConnect Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down CareerConnect Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    CareerConnect Server API

    Backend for the CareerConnect job board (jobs, applications, candidate pipeline)
    and the Qurban administration tools (animals, sponsors, distribution, products,
    bookkeeping and site settings).
    """,
    version="1.0.0",
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTimingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(jobs.router, prefix=f"{constant.API_V1_STR}/jobs")
app.include_router(applications.router, prefix=constant.API_V1_STR)
app.include_router(info_fields.router, prefix=f"{constant.API_V1_STR}/info-fields")
app.include_router(companies.router, prefix=f"{constant.API_V1_STR}/companies")
app.include_router(profiles.router, prefix=f"{constant.API_V1_STR}/profiles")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(addresses.router, prefix=f"{constant.API_V1_STR}/address")
app.include_router(settings.router, prefix=f"{constant.API_V1_STR}/settings")
app.include_router(images.router, prefix=constant.API_V1_STR)
app.include_router(hewan.router, prefix=f"{constant.API_V1_STR}/hewan")
app.include_router(keuangan.router, prefix=f"{constant.API_V1_STR}/keuangan")
app.include_router(kupon.router, prefix=f"{constant.API_V1_STR}/kupon")
app.include_router(mudhohi.router, prefix=constant.API_V1_STR)
app.include_router(distribusi.router, prefix=constant.API_V1_STR)
app.include_router(products.router, prefix=constant.API_V1_STR)
app.include_router(youtube.router, prefix=constant.API_V1_STR)
app.include_router(youtube.cron_router, prefix=constant.API_V1_STR)
app.include_router(ocr.router, prefix=constant.API_V1_STR)
app.include_router(itikaf.router, prefix=f"{constant.API_V1_STR}/itikaf")
app.include_router(regions.router, prefix=constant.API_V1_STR)
