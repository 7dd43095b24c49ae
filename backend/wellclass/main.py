# backend/wellclass/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes.v1 import (
    auth as auth_v1,
    bookings as bookings_v1,
    class_requests as class_requests_v1,
    health as health_v1,
    messaging as messaging_v1,
    payments as payments_v1,
    posted_times as posted_times_v1,
    prometheus as prometheus_v1,
    reviews as reviews_v1,
    teachers as teachers_v1,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(f"Starting {API_TITLE} {API_VERSION} ({settings.environment})")
    if not settings.stripe_configured:
        logger.warning("STRIPE_SECRET_KEY is not set; checkout creation will fail")
    if not settings.webhook_secrets:
        logger.warning("No Stripe webhook secret configured; webhook deliveries will be rejected")
    yield
    logger.info(f"Shutting down {API_TITLE}")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(auth_v1.router, prefix="/auth")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(payments_v1.router, prefix="/payments")
api_v1.include_router(reviews_v1.router, prefix="/reviews")
api_v1.include_router(teachers_v1.router, prefix="/teachers")
api_v1.include_router(posted_times_v1.router, prefix="/posted-times")
api_v1.include_router(class_requests_v1.router, prefix="/class-requests")
api_v1.include_router(messaging_v1.router, prefix="/messaging")

app.include_router(api_v1)
app.include_router(health_v1.router)
app.include_router(prometheus_v1.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("wellclass.main:app", host="0.0.0.0", port=8000, reload=settings.environment == "development")
