"""Exceptions raised by JournalBot services and mapped to HTTP responses."""

from typing import Optional


class JournalBotError(Exception):
    """Base class for all JournalBot errors."""

    status_code = 500


class NotFoundError(JournalBotError):
    """A referenced journal, paper, reviewer or config does not exist."""

    status_code = 404

    def __init__(self, message: str = "Resource not found", resource: Optional[str] = None):
        self.resource = resource
        super().__init__(message)


class InvalidInputError(JournalBotError):
    """Input violates a precondition of a service operation."""

    status_code = 400


class ConflictError(JournalBotError):
    """A unique constraint (DOI, email, journal/database pair) was violated."""

    status_code = 409

    def __init__(self, message: str = "Resource already exists", field: Optional[str] = None):
        self.field = field
        super().__init__(message)

