from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

from ewm_stats.api.errors import install_error_handlers
from ewm_stats.api.routes import router
from ewm_stats.core.config import settings
from ewm_stats.core.logging import configure_logging
from ewm_stats.db import engine
from ewm_stats.middleware.request_id import RequestIdMiddleware
from ewm_stats.models import Base

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
    logger.info("startup", env=settings.env)
    yield


app = FastAPI(title="Explore With Me Stats", lifespan=lifespan)
app.add_middleware(RequestIdMiddleware)

# Own registry so the stats app can share a process with the main service.
Instrumentator(registry=CollectorRegistry()).instrument(app).expose(
    app, endpoint="/metrics", include_in_schema=False
)

install_error_handlers(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router)
