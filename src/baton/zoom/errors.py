"""Exception hierarchy for the Zoom connector."""

from __future__ import annotations


class ZoomError(Exception):
    """Base exception for Zoom connector errors."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(ZoomError):
    """Network failure or timeout talking to Zoom.

    Not retried here; the caller decides whether to replay the call.
    """

    retryable = True


class UpstreamStatusError(ZoomError):
    """Zoom answered with an HTTP status >= 400."""

    pass


class NotFoundError(UpstreamStatusError):
    """Resource not found."""

    pass


class ZoomAuthError(UpstreamStatusError):
    """Authentication failed."""

    pass


class MalformedCursorError(ZoomError):
    """A pagination token could not be parsed."""

    pass


class ConnectorValidationError(ZoomError):
    """Request rejected before reaching Zoom."""

    pass


class PrincipalTypeError(ConnectorValidationError):
    """Principal is not of a resource type the entitlement can be granted to."""

    def __init__(self, principal_type: str, allowed: tuple[str, ...] = ("user",)):
        super().__init__(
            f"only {', '.join(allowed)} principals are supported, got '{principal_type}'"
        )
        self.principal_type = principal_type


class MissingProfileFieldError(ConnectorValidationError):
    """Account profile lacks a required field."""

    def __init__(self, field_name: str):
        super().__init__(f"{field_name.replace('_', ' ')} is required")
        self.field_name = field_name


class EntitlementError(ConnectorValidationError):
    """Entitlement is not one the resource type supports."""

    pass


class DeletionNotConfirmedError(ZoomError):
    """A deleted resource could still be fetched afterwards."""

    pass
