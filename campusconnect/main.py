# File: campusconnect/main.py
import time
import logging
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from campusconnect.api.v1.api import api_router
from campusconnect.api.v1.endpoints import ai
from campusconnect.core.config import settings
from campusconnect.core.exceptions import AuthenticationError, CampusConnectError
from campusconnect.db.database import Base, engine
from campusconnect import models  # noqa: F401  (registers tables on Base.metadata)

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors to JSON responses with ``detail`` and ``error_code``."""

    @app.exception_handler(CampusConnectError)
    async def campusconnect_error_handler(request: Request, exc: CampusConnectError) -> JSONResponse:
        if exc.status_code >= 500:
            details = getattr(exc, "details", None)
            logger.error(f"{request.method} {request.url.path} failed: {exc}" + (f" ({details})" if details else ""))
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc}")

        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error_code": exc.error_code},
            headers=headers,
        )


def create_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    allowed_origins = [settings.FRONTEND_URL]
    if settings.is_development:
        allowed_origins += ["http://localhost:3000", "http://127.0.0.1:3000"]

    application.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["X-Process-Time", "Content-Disposition"],
        max_age=3600,
    )

    # Request logging middleware (AFTER CORS)
    @application.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        logger.info(f"{request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_V1_STR)
    # AI helpers live outside the versioned API
    application.include_router(ai.router, prefix="/api", tags=["ai"])

    @application.on_event("startup")
    def create_tables() -> None:
        # Schema changes go through alembic; this only covers fresh databases
        Base.metadata.create_all(bind=engine)
        logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")

    @application.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "timestamp": time.time(),
        }

    return application


app = create_application()


if __name__ == "__main__":
    import os
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    host = "0.0.0.0" if settings.is_production else "127.0.0.1"

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(
        "campusconnect.main:app",
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.is_development,
    )
