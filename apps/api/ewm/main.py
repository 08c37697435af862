from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from ewm.api.errors import install_error_handlers
from ewm.api.routes.router import router
from ewm.core.config import settings
from ewm.core.logging import configure_logging
from ewm.db import engine
from ewm.middleware.rate_limit import RateLimitMiddleware
from ewm.middleware.request_id import RequestIdMiddleware
from ewm.models import Base
from ewm.stats_client import get_stats_client

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
    logger.info("startup", env=settings.env, stats_server_url=settings.stats_server_url)
    yield
    if get_stats_client.cache_info().currsize:
        get_stats_client().close()
        get_stats_client.cache_clear()


app = FastAPI(title="Explore With Me", lifespan=lifespan)

# Starlette runs the LAST added middleware FIRST (outermost):
# RequestId wraps everything, CORS answers preflight, RateLimit sits next to the app.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

install_error_handlers(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router)
