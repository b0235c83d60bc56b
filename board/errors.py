"""
Failure taxonomy for board operations.

Every error carries an `error_type` tag so the action layer can turn it into
a uniform failed result and the HTTP layer can pick a status code.
"""

from typing import Any, Dict, List, Optional


class BoardError(Exception):
    """Base class for all board failures."""
    error_type = "error"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(BoardError):
    """Malformed or missing input field. `details` lists field messages."""
    error_type = "validation"

    @classmethod
    def from_pydantic(cls, exc, message: str = "Invalid input") -> "ValidationError":
        details = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
            details.append({"field": field, "message": error.get("msg", "Invalid value")})
        return cls(message, details=details)


class InvalidReferenceError(BoardError):
    """A referenced column or assignee does not exist."""
    error_type = "reference"


class NotFoundError(BoardError):
    """The task, column or assignee being acted on does not exist."""
    error_type = "not_found"


class PersistenceError(BoardError):
    """The underlying store failed."""
    error_type = "persistence"
