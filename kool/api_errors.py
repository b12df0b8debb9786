"""Errors raised while talking to the Kool cloud API."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base class for every error coming from the cloud API layer."""

    message = "API error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class BadApiServerError(ApiError):
    message = "bad API server response"


class MissingTokenError(ApiError):
    message = "missing KOOL_API_TOKEN"


class DeployFailedError(ApiError):
    message = "deploy process has failed"


class UnauthorizedError(ApiError):
    message = "unauthorized; please check your KOOL_API_TOKEN"


class PayloadValidationError(ApiError):
    message = "something went wrong validating the payload"


class BadResponseStatusError(ApiError):
    message = "unexpected return status"


class UnexpectedResponseError(ApiError):
    message = "bad API response; please ask for support"


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        items = " ".join(f"{key}:{_format_value(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ApiResponseError(ApiError):
    """An error response returned by the API, with its HTTP status."""

    def __init__(
        self,
        status: int,
        message: str = "",
        errors: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        self.api_message = message
        self.errors = errors
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"{self.status} - {self.api_message}"
        if self.errors is not None:
            text += f" ({_format_value(self.errors)})"
        return text