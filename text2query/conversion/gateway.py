from __future__ import annotations

import logging
from dataclasses import dataclass

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_ollama import ChatOllama

from text2query.core.config import Settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """The model call failed; carries the underlying diagnostic"""
    pass


@dataclass(frozen=True)
class GatewayResult:
    completion: str | None = None
    error: GatewayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ModelGateway:
    """
    Single-attempt wrapper around the completion model.

    - Exactly one call per ``invoke``, no retry or backoff
    - Timeouts are whatever the underlying HTTP transport uses
    - Every failure (transport, auth, empty output) is returned as a
      ``GatewayError`` instead of being raised
    """

    def __init__(self, llm: Runnable):
        self.llm = llm
        self.chain = llm | StrOutputParser()

    async def invoke(self, prompt: str) -> GatewayResult:
        try:
            raw = await self.chain.ainvoke(prompt)
        except Exception as e:
            return GatewayResult(error=GatewayError(f"{type(e).__name__}: {e}"))

        completion = (raw or "").strip()
        if not completion:
            return GatewayResult(error=GatewayError("Model returned an empty completion"))
        return GatewayResult(completion=completion)


def build_gateway(settings: Settings) -> ModelGateway | None:
    """Construct the shared gateway at startup; None if the client can't be built."""
    try:
        llm = ChatOllama(**settings.ollama_config)
    except Exception:
        logger.exception(
            "Error initializing model client | model=%s | base_url=%s",
            settings.OLLAMA_MODEL.value,
            settings.OLLAMA_BASE_URL,
        )
        return None
    return ModelGateway(llm)
