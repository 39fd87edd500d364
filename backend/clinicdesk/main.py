"""
ClinicDesk - Practice Management API
Patients, consultations and the front-desk dashboard for small clinics.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import patients, consultations, dashboard
from .core.config import Settings, settings
from .core.errors import register_exception_handlers
from .core.request_logging import RequestLoggingMiddleware
from .seed_demo import seed_demo_data
from .storage import Storage, build_storage

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(storage: Optional[Storage] = None, config: Settings = settings) -> FastAPI:
    """Build the API around ``storage``, or the backend named in ``config``."""
    app = FastAPI(
        title="ClinicDesk Practice Management API",
        description=(
            "Patient records, consultation scheduling and daily dashboard "
            "statistics for small clinics."
        ),
        version=config.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.storage = storage if storage is not None else build_storage(config)

    if config.SEED_DEMO_DATA:
        seed_demo_data(app.state.storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(patients.router, prefix="/api")
    app.include_router(consultations.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": config.APP_NAME, "version": config.VERSION}

    logger.info("%s %s ready", config.APP_NAME, config.VERSION)
    return app


app = create_app()
