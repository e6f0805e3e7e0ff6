from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from text2query.api.schemas import ErrorResponse
from text2query.api.routes import router
from text2query.conversion.gateway import build_gateway
from text2query.conversion.orchestrator import TEXT_REQUIRED
from text2query.core.config import get_settings

import logging

# Basic console logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(name)-20s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    settings = get_settings()

    logger.info(
        "Starting | env=%s | model=%s | ollama=%s | port=%d",
        settings.ENVIRONMENT,
        settings.OLLAMA_MODEL.value,
        settings.OLLAMA_BASE_URL,
        settings.PORT,
    )

    # One long-lived client shared by every request
    app.state.gateway = build_gateway(settings)

    try:
        yield
    finally:
        logger.info("Shutting down")


# Create app with conditional docs
settings = get_settings()

app = FastAPI(
    title="Text2Query API",
    description="Natural language to SQL / MongoDB query conversion",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # A missing, non-JSON or non-object body carries no text
    logger.info("Malformed request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=TEXT_REQUIRED).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else "unknown",
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


@app.get("/health", include_in_schema=False)
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
