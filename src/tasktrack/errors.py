from abc import ABC
from dataclasses import dataclass


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails.

    Unknown, revoked and expired tokens all share the same message so the
    response does not reveal which case applied.
    """

    def __init__(self, message: str = "Invalid or expired session") -> None:
        super().__init__(message)


class ConflictError(UserError):
    """Raised when a resource with the same unique key already exists."""


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """A single field-level validation failure."""

    path: str
    message: str


class ValidationError(UserError):
    """Raised when user input fails validation.

    ``issues`` lists every failing field so clients can render them all at once.
    """

    def __init__(self, message: str = "Validation failed", issues: list[FieldIssue] | None = None) -> None:
        super().__init__(message)
        self.issues = issues or []
