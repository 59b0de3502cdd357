import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from villa import database
from villa.core.config import settings
from villa.core.errors import register_exception_handlers
from villa.core.logging import setup_logging
from villa.core.rate_limiter import limiter
from villa.middleware.request_logger import RequestLoggerMiddleware

from villa.api.health import router as health_router
from villa.api.settings import router as settings_router
from villa.api.bookings import router as bookings_router
from villa.api.gallery import router as gallery_router
from villa.api.contact import router as contact_router
from villa.web.routers import site_web


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title="Villa Niva Booking",
    description="Availability, pricing and reservations for Villa Niva",
    version="1.0.0",
)

register_exception_handlers(app)

# -------------------------------------------------
# Middleware
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------
# Routers
# -------------------------------------------------
for router in (health_router, settings_router, bookings_router, gallery_router, contact_router):
    app.include_router(router, prefix=settings.api_prefix)

app.mount(
    "/static",
    StaticFiles(directory=str(Path(__file__).resolve().parent / "web" / "static")),
    name="static",
)
app.include_router(site_web.router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")
    await database.init_db()

    if settings.seed_on_startup:
        from villa.services.seed_service import seed_demo_data

        async with database.AsyncSessionLocal() as session:
            await seed_demo_data(session)


@app.on_event("shutdown")
async def on_shutdown():
    await database.engine.dispose()
    logger.info("FastAPI shutdown")


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
