"""
Error taxonomy shared by services and the API layer.

Each error carries the HTTP status it maps to; the app factory registers a
single handler for ``DomainError`` that renders
``{"success": false, "message": ...}``.
"""


class DomainError(Exception):
    status_code = 500
    public_message = None  # when set, replaces the detail in responses

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    status_code = 400


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """A live negotiation (or active subscription) already exists."""

    status_code = 409


class InvalidStateError(DomainError):
    """Transition attempted from a terminal or wrong state."""

    status_code = 409


class UpstreamError(DomainError):
    """The external weather provider is unreachable or misbehaving."""

    status_code = 500
    public_message = "Failed to fetch weather data"
