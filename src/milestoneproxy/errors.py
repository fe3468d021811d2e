from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NOT_CONFIGURED = "NOT_CONFIGURED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


# HTTP status returned by the route layer for each error code.
HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.NOT_CONFIGURED: 503,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.UPSTREAM_UNAVAILABLE: 502,
    ErrorCode.EXTRACTION_FAILED: 422,
    ErrorCode.INVALID_INPUT: 400,
}


class MilestoneProxyError(Exception):
    """Raised by handlers and their collaborators for all expected failures.

    Caught by server.py and serialised into the JSON error body. Never catch
    this inside business logic; let it propagate to the route layer so the
    client receives a status code matching the failure.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
