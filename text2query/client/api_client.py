from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from text2query.api.schemas import ConvertResponse
from text2query.core.constants import AppSettings, Dialect

CONVERT_PATH = "/api/convert"


class ConverterAPIError(Exception):
    """Conversion request failed; ``message`` is suitable for display"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConverterClient:
    """
    HTTP client for the Text2Query API.

    Only connection failures are retried: the request never reached the
    server, so the model cannot have been called.
    """

    def __init__(self, base_url: str = AppSettings.API_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True,
    )
    def _post(self, payload: dict) -> httpx.Response:
        response = self._http_client.post(CONVERT_PATH, json=payload)
        response.raise_for_status()
        return response

    def convert(self, text: str, dialect: Dialect) -> ConvertResponse:
        """
        Raises:
            ConverterAPIError: with a user-facing message for every failure
        """
        try:
            response = self._post({"text": text, "format": dialect.value})
            return ConvertResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise ConverterAPIError(
                _status_message(e.response), e.response.status_code) from e
        except httpx.RequestError as e:
            raise ConverterAPIError(
                "No response from server. Please check if the API server is running.") from e
        except (ValidationError, ValueError) as e:
            raise ConverterAPIError(
                "Failed to convert text. Please try again.") from e

    def close(self) -> None:
        """Close underlying HTTP client"""
        self._http_client.close()

    def __enter__(self) -> 'ConverterClient':
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def _status_message(response: httpx.Response) -> str:
    if response.status_code == 401:
        return "API authentication error. Please check the API key configuration."
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Server error: {response.status_code}"
