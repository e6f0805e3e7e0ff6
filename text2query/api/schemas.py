from typing import Any

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    # Loosely typed so missing or wrong-typed values reach the orchestrator
    # and come back as 400s with the documented messages.
    text: Any = Field(None, description="Natural-language description of the query")
    format: Any = Field(None, description="Target dialect: sql or mongodb")


class ConvertResponse(BaseModel):
    query: str
    note: str | None = None


class ErrorResponse(BaseModel):
    error: str
