from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from campus_survey.core.config import settings
from campus_survey.db.mongodb import init_store, close_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A store passed to create_app() is used as is
    if getattr(app.state, "store", None) is None:
        app.state.store = await init_store(settings)

    logger.info(f"Campus Survey API running on port {settings.PORT}")
    logger.info(f"Analytics: http://localhost:{settings.PORT}/api/analytics/overview")
    logger.info(f"Health Check: http://localhost:{settings.PORT}/api/health")

    yield

    await close_store(app)
