"""PropUnit Unit Numbering Service - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import PropUnitException
from .core.logging import (
    RequestIdMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .modules.commons import BaseResponse
from .modules.unit_numbering import router as unit_numbering_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_to_file=settings.log_to_file,
        log_level=settings.log_level,
        log_file_path=settings.log_file_path,
        use_json_format=settings.use_json_logs,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger.info("Starting PropUnit application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Debug mode: {settings.app_debug}")
    yield
    logger.info("Shutting down PropUnit application...")
    shutdown_logging()


app = FastAPI(
    title=settings.api_title,
    description="Unit numbering conventions, floor correlation and conflict checks",
    version=settings.api_version,
    docs_url=f"{settings.api_prefix}/docs" if settings.app_debug else None,
    redoc_url=f"{settings.api_prefix}/redoc" if settings.app_debug else None,
    openapi_url=f"{settings.api_prefix}/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Added last so it runs first and the transaction ID is set for all other middleware
app.add_middleware(RequestIdMiddleware, log_requests=settings.log_requests)


@app.exception_handler(PropUnitException)
async def propunit_exception_handler(request: Request, exc: PropUnitException):
    """Handle PropUnit-specific exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=BaseResponse(
            success=False, message=exc.message, error=exc.message
        ).model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content=BaseResponse(
            success=False,
            message="Internal server error",
            error=str(exc) if settings.app_debug else "Internal server error",
        ).model_dump(mode="json"),
    )


@app.get(
    f"{settings.api_prefix}/health", response_model=BaseResponse[dict], tags=["Health"]
)
async def health_check():
    """Health check endpoint."""
    return BaseResponse(
        success=True,
        data={
            "status": "healthy",
            "version": settings.api_version,
            "env": settings.app_env,
        },
    )


app.include_router(unit_numbering_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "propunit_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
