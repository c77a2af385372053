"""
Exceptions raised by the ideacoach AI pipeline.

Every failure of a provider call is surfaced as a subclass of AIServiceError.
Each class names its error kind and carries a user-facing message that the
host application can show as-is.
"""

from typing import Optional


class AIServiceError(Exception):
    """Base exception for all AI pipeline errors."""

    kind = "Unknown"
    default_user_message = "Something went wrong. Please try again."

    @property
    def user_message(self) -> str:
        return self.default_user_message


# =============================================================================
# Configuration
# =============================================================================

class MissingAPIKeyError(AIServiceError):
    """Raised when no API key is configured; the network is never touched."""

    kind = "MissingConfiguration"
    default_user_message = "The AI assistant is not configured yet."

    def __init__(self):
        super().__init__("No API key configured for the generative-language provider")


# =============================================================================
# Network
# =============================================================================

class NetworkError(AIServiceError):
    """Raised when the request could not complete at the transport level."""

    kind = "Network"
    default_user_message = "Network problem. Check your connection and try again."


class NetworkTimeoutError(NetworkError):
    """Raised when the request exceeds its time budget."""

    default_user_message = "The request timed out. Please try again."

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Request timed out after {timeout_seconds} seconds")


class NoConnectivityError(NetworkError):
    """Raised when the provider host cannot be reached."""

    default_user_message = "You appear to be offline. Check your connection and try again."


class UnknownNetworkError(NetworkError):
    """Wraps any other transport failure with its underlying message."""

    def __init__(self, message: str):
        self.underlying_message = message
        super().__init__(f"Unknown error: {message}")


# =============================================================================
# Protocol
# =============================================================================

class ProtocolViolationError(AIServiceError):
    """Raised when the response body does not match the expected envelope."""

    kind = "ProtocolViolation"
    default_user_message = "The AI service returned an unexpected response."


class EmptyResponseError(ProtocolViolationError):
    """Raised when a successful response has an empty body."""

    def __init__(self):
        super().__init__("Empty response body")


class InvalidResponseError(ProtocolViolationError):
    """Raised when the candidates[0].content.parts[0].text path is absent."""

    def __init__(self, detail: str = "Expected candidates[0].content.parts[0].text"):
        self.detail = detail
        super().__init__(f"Invalid response: {detail}")


class UnusableResponseError(ProtocolViolationError):
    """Raised when a tolerant parser produced no usable records."""

    def __init__(self, task: str):
        self.task = task
        super().__init__(f"No usable records parsed for task '{task}'")


# =============================================================================
# Provider status classes
# =============================================================================

class RateLimitedError(AIServiceError):
    """Raised on HTTP 429."""

    kind = "RateLimit"
    default_user_message = "Too many requests. Please wait a moment and try again."

    def __init__(self, message: str = "Rate limited"):
        self.provider_message = message
        super().__init__(message)


class QuotaExceededError(RateLimitedError):
    """Raised on HTTP 429 when the provider reports an exhausted quota."""

    kind = "QuotaExceeded"
    default_user_message = "The AI usage quota has been reached. Please try again later."


class ContentBlockedError(AIServiceError):
    """Raised when the provider refuses the prompt on content-policy grounds."""

    kind = "ContentPolicyBlock"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Content blocked: {reason}")

    @property
    def user_message(self) -> str:
        return f"This request was blocked by the AI provider ({self.reason}). Try rephrasing it."


class AuthenticationFailedError(AIServiceError):
    """Raised on HTTP 401/403."""

    kind = "AuthenticationFailure"
    default_user_message = "The AI service rejected the API key."

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(f"Authentication failed ({status_code}): {message}".rstrip(": "))


class RequestTooLargeError(AIServiceError):
    """Raised on HTTP 400 when the provider reports an oversized request."""

    kind = "RequestTooLarge"
    default_user_message = "That request is too large. Try shortening it."

    def __init__(self, message: str):
        self.provider_message = message
        super().__init__(f"Request too large: {message}")


class ServiceUnavailableError(AIServiceError):
    """Raised on HTTP 5xx."""

    kind = "ServerUnavailable"
    default_user_message = "The AI service is temporarily unavailable. Please try again later."

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(f"Service unavailable ({status_code}): {message}".rstrip(": "))


class HttpError(AIServiceError):
    """Unclassified HTTP failure; status and provider message are passed through."""

    kind = "UnclassifiedHttpError"

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.provider_message = message
        super().__init__(f"HTTP {status_code}: {message}")

    @property
    def user_message(self) -> str:
        return f"The AI service returned an error ({self.status_code}). Please try again."


# =============================================================================
# Serialization
# =============================================================================

class SerializationError(AIServiceError):
    """Raised when a payload cannot be encoded, or strict JSON cannot be decoded."""

    kind = "SerializationFailure"
    default_user_message = "The AI response could not be understood. Please try again."

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message if cause is None else f"{message}: {cause}")
