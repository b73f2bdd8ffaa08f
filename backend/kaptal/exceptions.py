"""
Domain errors rendered by the exception handlers in kaptal.main.

Every error carries the HTTP status it maps to and a user-facing message in
Portuguese, since the message goes straight to the frontend.
"""

from typing import Dict, List, Optional


class KaptalError(Exception):
    """Base class for errors that become a `{success: false}` response."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class InvalidRequestError(KaptalError):
    """Input is well-formed but breaks a business rule."""
    status_code = 400


class UnauthorizedError(KaptalError):
    status_code = 401


class NotFoundError(KaptalError):
    """Referenced row is missing or belongs to another user."""
    status_code = 404


class UpstreamError(KaptalError):
    status_code = 502


class ServiceUnavailableError(KaptalError):
    status_code = 503
