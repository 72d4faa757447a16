from __future__ import annotations

from typing import Optional


class BridgeError(Exception):
    """Base class for failures surfaced to callers of the relay."""


class ConfigurationError(BridgeError):
    """A required secret or setting is absent."""


class UpstreamError(BridgeError):
    """An outbound call returned a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.status = status
        self.detail = detail


class RetryExhaustedError(UpstreamError):
    def __init__(self, message: str, status: Optional[int], detail: str, attempts: int):
        super().__init__(message, status=status, detail=detail)
        self.attempts = attempts


class ReplyParseError(BridgeError, ValueError):
    """The language model did not return the JSON we asked for."""
