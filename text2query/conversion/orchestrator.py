from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from text2query.conversion.fallback import FALLBACK_CATALOG, FallbackEntry, lookup
from text2query.conversion.gateway import ModelGateway
from text2query.conversion.prompt_builder import build_prompt
from text2query.core.constants import Dialect
from text2query.core.prompts import FALLBACK_NOTE

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Text is required"
FORMAT_REQUIRED = "Valid format (sql or mongodb) is required"


class ConversionError(Exception):
    """Base exception for conversion failures surfaced to the caller"""
    pass


class ValidationError(ConversionError):
    """Request text or format is missing or malformed"""
    pass


class ServiceUnavailableError(ConversionError):
    """Model client was not constructed at startup"""
    pass


class ConversionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    dialect: Dialect


class ConversionResult(BaseModel):
    """``note`` is set only when ``query`` came from the fallback catalog"""

    model_config = ConfigDict(frozen=True)

    query: str
    note: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.note is not None


class ConversionOrchestrator:
    """Validate → prompt → model call → fallback on failure.

    Holds no per-request state; the gateway and catalog are shared read-only.
    """

    def __init__(
        self,
        gateway: ModelGateway | None,
        catalog: Mapping[Dialect, FallbackEntry] = FALLBACK_CATALOG,
    ):
        self.gateway = gateway
        self.catalog = catalog

    @staticmethod
    def validate(text: Any, fmt: Any) -> ConversionRequest:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(TEXT_REQUIRED)

        dialect = Dialect.parse(fmt)
        if dialect is None:
            raise ValidationError(FORMAT_REQUIRED)

        return ConversionRequest(text=text.strip(), dialect=dialect)

    async def convert(self, text: Any, fmt: Any) -> ConversionResult:
        request = self.validate(text, fmt)

        if self.gateway is None:
            raise ServiceUnavailableError("Model client not initialized")

        prompt = build_prompt(request.text, request.dialect)
        outcome = await self.gateway.invoke(prompt)

        if outcome.ok:
            return ConversionResult(query=outcome.completion)

        logger.error(
            "Model call failed, serving fallback | dialect=%s | error=%s",
            request.dialect.value,
            outcome.error,
        )
        return ConversionResult(
            query=lookup(request.dialect, self.catalog),
            note=FALLBACK_NOTE,
        )
