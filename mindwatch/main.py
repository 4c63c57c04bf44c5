import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure

from mindwatch.core.config import get_settings
from mindwatch.core.logging_config import setup_logging
from mindwatch.db.database import close_database, init_database
from mindwatch.routers import analysis_router
from mindwatch.routers import chat_router
from mindwatch.routers import journal_router
from mindwatch.services.exceptions import ServiceUnavailable
from mindwatch.services.model_gateway import init_gateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    init_gateway(settings)
    init_database(settings)
    yield
    close_database()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Backend for chat, mood tracking and journaling with AI-assisted insights.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(chat_router.router)
app.include_router(analysis_router.router)
app.include_router(journal_router.router)


@app.exception_handler(ServiceUnavailable)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailable):
    return JSONResponse(status_code=503, content={"success": False, "message": exc.message})


@app.exception_handler(ConnectionFailure)
async def database_unavailable_handler(request: Request, exc: ConnectionFailure):
    logger.error("Database unavailable for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"success": False, "message": "Database unavailable"})


@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.app_name, "version": settings.app_version}
