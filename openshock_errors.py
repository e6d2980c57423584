"""
Exceptions raised by the OpenShock API client.

Low-level failures (transport, HTTP status, JSON parsing, response shape) are
raised by the request primitives. Every client operation wraps them in an
OpenShockAPIError chained to the original failure.
"""


class OpenShockError(Exception):
    """Base exception for the OpenShock client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(OpenShockError, ValueError):
    """Raised when a constructor or call argument is rejected before any I/O."""


class TransportError(OpenShockError):
    """Raised when the request never produced a response (DNS, connection, timeout)."""


class HttpStatusError(OpenShockError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP status {status_code}")


class ParseError(OpenShockError):
    """Raised when a response body is not valid JSON."""


class ShapeError(OpenShockError):
    """Raised when decoded JSON lacks the fields an endpoint is expected to return."""


class OpenShockAPIError(OpenShockError):
    """
    Raised by client operations.

    Attributes:
        operation: Phrase naming the failed operation (e.g. "Failed to fetch hubs")
        cause: The lower-level OpenShockError that triggered the failure
    """

    def __init__(self, operation: str, cause: OpenShockError, message: str = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}! {message or cause.message}")

    @property
    def status_code(self):
        """HTTP status of the underlying failure, if it was an HttpStatusError."""
        return getattr(self.cause, "status_code", None)
