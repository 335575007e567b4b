"""
Gemini generateContent client.
One POST per call, no retries. The reply text is parsed as JSON and validated
against the prompt's response model.
"""
import json
import time
from typing import Any, Optional

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from clauseclear.config import Settings
from clauseclear.errors import ConfigurationError, NetworkError, RemoteAPIError, ResponseParseError
from clauseclear.services.prompts import Prompt

logger = structlog.get_logger(__name__)


def _remote_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text or f"HTTP {response.status_code}"


def _generated_text(envelope: Any) -> str:
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise RemoteAPIError("Invalid response structure from API.")
    if not isinstance(text, str):
        raise RemoteAPIError("Invalid response structure from API.")
    return text


class GeminiGateway:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._client = httpx.AsyncClient(timeout=settings.gemini_timeout, transport=transport)

    @property
    def endpoint(self) -> str:
        return f"{self.settings.gemini_base_url}/models/{self.settings.gemini_model}:generateContent"

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GeminiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _payload(self, prompt: Prompt) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt.text}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": prompt.response_schema,
            },
        }

    async def generate_json(self, prompt: Prompt) -> Any:
        """POST the prompt and return the decoded JSON the model generated."""
        if not self.settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set. Add it to .env")

        log = logger.bind(kind=prompt.kind.value, model=self.settings.gemini_model)
        started = time.monotonic()
        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self.settings.gemini_api_key},
                json=self._payload(prompt),
            )
        except httpx.HTTPError as e:
            log.error("gemini_unreachable", error=str(e) or e.__class__.__name__)
            raise NetworkError(f"Could not reach the Gemini API: {str(e) or e.__class__.__name__}") from e

        elapsed_ms = round((time.monotonic() - started) * 1000)
        if not response.is_success:
            message = _remote_error_message(response)
            log.error("gemini_request_failed", status=response.status_code, error=message, elapsed_ms=elapsed_ms)
            raise RemoteAPIError(f"API call failed: {message}", status_code=response.status_code)

        try:
            envelope = response.json()
        except ValueError as e:
            raise RemoteAPIError("Invalid response structure from API.", status_code=response.status_code) from e
        text = _generated_text(envelope)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            log.warning("gemini_reply_not_json", elapsed_ms=elapsed_ms)
            raise ResponseParseError(f"Model reply was not valid JSON: {e.msg}") from e

        log.info("gemini_request_completed", elapsed_ms=elapsed_ms)
        return data

    async def generate(self, prompt: Prompt) -> BaseModel:
        data = await self.generate_json(prompt)
        if not isinstance(data, dict):
            data = {}
        try:
            return prompt.response_model.model_validate(data)
        except ValidationError as e:
            raise ResponseParseError(
                f"Model reply did not match the expected {prompt.kind.value} schema: {e.error_count()} error(s)"
            ) from e
