"""Failure types raised by the service layer.

Services raise these; the exception handlers in api/errors.py map
each one to an HTTP status and a ``{"message": ...}`` body.
"""

from __future__ import annotations


class CourseServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CourseServiceError):
    """A referenced course, section, video or assignment does not exist."""


class ValidationError(CourseServiceError, ValueError):
    """Input is malformed or violates a domain constraint."""


class ForbiddenError(CourseServiceError):
    """The caller lacks the role the operation requires."""


class ConflictError(CourseServiceError):
    """The write collides with an existing record."""


class DuplicateOrderError(ConflictError):
    """Another record in the course already holds this order position.

    Raised by repositories; the ordering service retries with a fresh count.
    """
