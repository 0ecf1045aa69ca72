"""Service errors that map directly onto HTTP error responses."""

from typing import Any


class ServiceError(Exception):
    """Base error carrying the HTTP status and JSON body for the caller."""

    status_code = 500

    def __init__(self, error: str, detail: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class ValidationError(ServiceError):
    """The caller's request is malformed; no upstream was contacted."""

    status_code = 400


class UpstreamError(ServiceError):
    """A configured provider was reachable but the final attempt failed."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__("AI backend error", detail=detail)


class ConfigurationError(ServiceError):
    """The deployment has no usable provider credentials."""

    status_code = 503
