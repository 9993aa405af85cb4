"""Error taxonomy for the registration core.

Every error carries a human-readable ``message`` and the HTTP status the web
layer maps it to. Nothing here knows about FastAPI.
"""
from __future__ import annotations


class SiahrokhError(Exception):
    """Base class for all registration core errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(SiahrokhError):
    """One or more submission rules were violated. All messages are kept, in rule order."""

    status_code = 400

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(message)


class NotFound(SiahrokhError):
    """Referenced tournament, registration or certificate does not exist."""

    status_code = 404


class CertificateIdExhausted(SiahrokhError):
    """No free certificate id was found within the retry bound."""

    status_code = 500

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate unique certificate ID after {attempts} attempts")


class BackendUnavailable(SiahrokhError):
    """The durable store could not be initialized."""

    status_code = 503


class DuplicateKey(SiahrokhError):
    """The storage layer rejected an insert on a unique constraint."""

    status_code = 500
