"""Failure taxonomy of the critique pipeline.

Every exception carries the HTTP status and the public message that end up
in the failure response. Internal detail stays in the logs.
"""

from typing import Any, Dict, List, Optional


class CritiqueException(Exception):
    """Base exception for critique pipeline failures."""

    status_code: int = 500
    public_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message
        self.details = details


class ValidationError(CritiqueException):
    """The request body is malformed or misses required fields."""

    status_code = 400
    public_message = "Invalid request body"

    def __init__(self, issues: List[Dict[str, Any]]):
        super().__init__(self.public_message, details=issues)
        self.issues = issues


class BadContentType(CritiqueException):
    """The request body is not declared as JSON."""

    status_code = 415
    public_message = "Content-Type must be application/json"

    def __init__(self, content_type: str = ""):
        super().__init__(self.public_message)
        self.content_type = content_type


class Misconfigured(CritiqueException):
    """The operator did not provide the model endpoint credential."""

    status_code = 500
    public_message = "Server misconfigured: HF_TOKEN missing"


class UpstreamTimeout(CritiqueException):
    """The model call did not settle within the configured bound."""

    status_code = 504
    public_message = "Upstream model request timed out"

    def __init__(self, timeout_ms: int):
        super().__init__(self.public_message)
        self.timeout_ms = timeout_ms


class ServerError(CritiqueException):
    """Catch-all; the caller only ever sees the generic message."""

    status_code = 500
    public_message = "Server error"
