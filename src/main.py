from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.config import get_settings
from src.scheduler.runner import MonitorService

settings = get_settings()
monitor: Optional[MonitorService] = None

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    global monitor
    logger.info(f"Starting {settings.app_name}...")

    if settings.monitor_enabled:
        monitor = MonitorService(settings=settings)
        monitor.start()
    else:
        logger.warning("Monitor disabled, serving liveness endpoint only")

    yield

    logger.info("Shutting down...")
    if monitor:
        monitor.stop()
        monitor = None


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.api_route("/{path:path}", methods=ALL_METHODS)
async def liveness(path: str):
    return PlainTextResponse(f"{settings.app_name} running\n")
