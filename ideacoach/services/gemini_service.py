"""
Gemini service implementation for ideacoach.
Sends one generateContent request per call over HTTPS and classifies the outcome.
"""

import asyncio
import json
from typing import Any, Dict, Optional

import httpx

from ideacoach.constants import CONNECT_TIMEOUT, DEFAULT_BASE_URL, DEFAULT_MODEL, TRANSFER_TIMEOUT
from ideacoach.exceptions import (
    AuthenticationFailedError,
    ContentBlockedError,
    EmptyResponseError,
    HttpError,
    InvalidResponseError,
    MissingAPIKeyError,
    NetworkTimeoutError,
    NoConnectivityError,
    QuotaExceededError,
    RateLimitedError,
    RequestTooLargeError,
    SerializationError,
    ServiceUnavailableError,
    UnknownNetworkError,
)
from ideacoach.models.prompt import GenerationConfig
from ideacoach.services.ai_service import AIService
from ideacoach.utils.logger import logger

BLOCK_MARKERS = ("block", "safety")
SIZE_MARKERS = ("size", "too large", "too long", "exceeds")


def build_request_body(prompt: str, generation_config: Optional[GenerationConfig] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
    if generation_config is not None:
        payload = generation_config.to_payload()
        if payload:
            body["generationConfig"] = payload
    return body


def _block_reason(envelope: Dict[str, Any]) -> Optional[str]:
    """promptFeedback.blockReason, or None; a malformed promptFeedback is an InvalidResponseError."""
    feedback = envelope.get("promptFeedback")
    if feedback is None:
        return None
    if not isinstance(feedback, dict):
        raise InvalidResponseError("promptFeedback is not a JSON object")
    reason = feedback.get("blockReason")
    return str(reason) if reason else None


def extract_text(envelope: Any) -> str:
    """Return candidates[0].content.parts[0].text, or raise InvalidResponseError."""
    if not isinstance(envelope, dict):
        raise InvalidResponseError("Response body is not a JSON object")

    candidates = envelope.get("candidates")
    if not candidates:
        block_reason = _block_reason(envelope)
        if block_reason:
            raise ContentBlockedError(block_reason)
        raise InvalidResponseError("Response has no candidates")

    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise InvalidResponseError()
    if not isinstance(text, str):
        raise InvalidResponseError("candidates[0].content.parts[0].text is not a string")
    return text


def error_message(response: httpx.Response) -> str:
    """The provider's error message, or the standard reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        feedback = body.get("promptFeedback")
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            return f"Prompt blocked: {feedback['blockReason']}"
    return response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)


def classify_error(response: httpx.Response) -> Exception:
    """Map a non-2xx response onto the error taxonomy."""
    status = response.status_code
    message = error_message(response)
    lowered = message.lower()

    if status == 400:
        if any(marker in lowered for marker in BLOCK_MARKERS):
            return ContentBlockedError(message)
        if any(marker in lowered for marker in SIZE_MARKERS):
            return RequestTooLargeError(message)
        return HttpError(status, message)
    if status in (401, 403):
        return AuthenticationFailedError(status, message)
    if status == 429:
        if "quota" in lowered:
            return QuotaExceededError(message)
        return RateLimitedError(message)
    if 500 <= status <= 599:
        return ServiceUnavailableError(status, message)
    return HttpError(status, message)


class GeminiService(AIService):
    """Gemini generateContent client over httpx."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        connect_timeout: float = CONNECT_TIMEOUT,
        transfer_timeout: float = TRANSFER_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Gemini service.

        Args:
            api_key: Google AI API key; calls fail with MissingAPIKeyError when empty
            model: Gemini model to use
            base_url: Provider API root
            connect_timeout: Budget for initiating the request, in seconds
            transfer_timeout: Budget for the whole exchange, in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.connect_timeout = connect_timeout
        self.transfer_timeout = transfer_timeout
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_text(self, prompt: str, generation_config: Optional[GenerationConfig] = None) -> str:
        """
        Send the prompt and return the first candidate's text.

        Args:
            prompt: The final rendered prompt
            generation_config: Optional sampling parameters

        Returns:
            Raw model output text
        """
        if not self.api_key:
            raise MissingAPIKeyError()

        try:
            content = json.dumps(build_request_body(prompt, generation_config), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError("Could not encode request body", e)

        logger.debug(f"Sending generateContent request to {self.model} ({len(content)} bytes)")
        try:
            response = await asyncio.wait_for(self._post(content), timeout=self.transfer_timeout)
        except asyncio.TimeoutError:
            raise NetworkTimeoutError(self.transfer_timeout)
        except httpx.TimeoutException:
            raise NetworkTimeoutError(self.connect_timeout)
        except (httpx.ConnectError, httpx.NetworkError) as e:
            raise NoConnectivityError(f"Could not reach the AI service: {e}")
        except Exception as e:
            raise UnknownNetworkError(str(e) or type(e).__name__)

        if not response.is_success:
            error = classify_error(response)
            logger.warning(f"Gemini request failed with status {response.status_code}: {type(error).__name__}")
            raise error

        if not response.content.strip():
            raise EmptyResponseError()

        try:
            envelope = response.json()
        except ValueError:
            raise InvalidResponseError("Response body is not valid JSON")

        text = extract_text(envelope)
        logger.debug(f"Received {len(text)} characters from {self.model}")
        return text

    async def _post(self, content: bytes) -> httpx.Response:
        timeout = httpx.Timeout(self.connect_timeout)
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            return await client.post(
                self.endpoint,
                params={"key": self.api_key},
                content=content,
                headers={"Content-Type": "application/json"},
            )
