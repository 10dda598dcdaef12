"""
errors.py
---------
Error taxonomy shared by every layer.
Each error carries the HTTP status the transport layer should answer with.
"""

from typing import Optional


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Args:
            message: Human-readable error message.
            details: Optional context (offending handle, id, filter keys...).
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Render the error body the way the HTTP layer returns it."""
        return {"error": {"message": self.message, "status": self.status_code}}


class InvalidInputError(JoblyError):
    """Caller supplied no updatable fields, a malformed value or an unknown filter."""

    status_code = 400


class ConflictError(JoblyError):
    """A uniqueness rule was violated on creation."""

    status_code = 400


class NotFoundError(JoblyError):
    """The target row does not exist."""

    status_code = 404


class StorageError(JoblyError):
    """The store failed for any other reason (lost connection, schema error...)."""

    status_code = 500
