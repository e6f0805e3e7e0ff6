import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from .schemas import ConvertRequest, ConvertResponse, ErrorResponse
from .dependencies import get_orchestrator
from text2query.conversion.orchestrator import (
    ConversionOrchestrator,
    ServiceUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Text2Query"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Text2Query API is running"


@router.post(
    "/api/convert",
    response_model=ConvertResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Missing text or unsupported format"},
        500: {"model": ErrorResponse, "description": "Model client unavailable or internal failure"},
    },
)
async def convert(
    request: ConvertRequest,
    orchestrator: Annotated[ConversionOrchestrator, Depends(get_orchestrator)],
):
    """
    Convert a natural-language request into a SQL or MongoDB query.
    """
    try:
        result = await orchestrator.convert(request.text, request.format)
    except ValidationError as exc:
        logger.info("Rejected convert request: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except ServiceUnavailableError as exc:
        logger.error("Convert request failed: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except Exception:
        logger.exception("Error converting text to query")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to convert text to query")

    return ConvertResponse(query=result.query, note=result.note)
