"""Custom exception classes for the API."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class BadRequestError(APIError):
    """Request could not be understood."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=400, details=details)


class ConfigurationError(APIError):
    """A required setting (usually an API key) is missing."""

    def __init__(self, setting: str, service: str):
        super().__init__(
            message=f"{service} is not configured: set {setting.upper()}",
            status_code=503,
            details={"setting": setting, "service": service},
        )
        self.setting = setting
        self.service = service


class UpstreamServiceError(APIError):
    """A third-party API failed or answered with something we could not parse."""

    def __init__(
        self,
        message: str,
        provider: str,
        error_code: str = "UPSTREAM_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=502,
            details={"provider": provider, "error_code": error_code, **(details or {})},
        )
