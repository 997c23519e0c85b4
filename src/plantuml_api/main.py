"""Main FastAPI application for the PlantUML rendering API."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from plantuml_core.config import EngineConfig
from plantuml_core.errors import DiagramError

from . import __version__
from .models.config import APIConfig
from .models.responses import ErrorResponse
from .routes import health, info, render


# Global config instance
config = APIConfig.from_env()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting PlantUML Server v%s", app.version)
    logger.info("Configuration: %s", config.model_dump())
    logger.info("Engine: %s", EngineConfig.from_env().model_dump())

    yield

    logger.info("API shutdown complete")


def error_response(status_code: int, error_detail: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error_detail,
            timestamp=datetime.now()
        ).model_dump(mode="json")
    )


# Create FastAPI app
app = FastAPI(
    title="PlantUML Server",
    description="HTTP API for PlantUML diagram generation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DiagramError)
async def diagram_error_handler(request: Request, exc: DiagramError):
    """Translate classified decode/render failures into structured errors."""
    if exc.client_error:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    else:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path,
                     exc.message, exc.diagnostic)
    return error_response(exc.status_code, exc.to_detail())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with structured error responses."""

    # If detail is already a dict (from our endpoints), use it directly
    if isinstance(exc.detail, dict):
        error_detail = exc.detail
    else:
        error_detail = {
            "code": "HTTP_ERROR",
            "message": str(exc.detail),
            "details": None
        }

    return error_response(exc.status_code, error_detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unknown formats and other malformed requests."""
    return error_response(422, {
        "code": "INVALID_REQUEST",
        "message": "Request validation failed",
        "details": str(exc.errors())
    })


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error handling %s %s", request.method, request.url.path)

    return error_response(500, {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "details": None
    })


# Include routers
app.include_router(health.router)
app.include_router(info.router)
app.include_router(render.router)


def run():
    """Console entry point."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "plantuml_api.main:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level
    )


if __name__ == "__main__":
    run()
