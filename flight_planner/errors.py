"""
Error taxonomy shared by the controllers.

Every controller operation catches ``PlannerError`` at its own boundary and
turns it into text in the error region that belongs to that controller.
"""

from typing import Optional


class PlannerError(Exception):
    """Base class for errors surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(PlannerError):
    """Required input is missing or invalid; no request was issued."""


class ApplicationError(PlannerError):
    """The endpoint answered with a structured failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(PlannerError):
    """Network failure, unreadable body or unexpected content type."""


class ProtocolError(TransportError):
    """The response body or content type is not what the endpoint promises."""


class RenderError(PlannerError):
    """A single result item could not be formatted."""


def describe_payload_error(exc) -> str:
    """First readable message of a pydantic ``ValidationError``."""
    try:
        errors = exc.errors()
    except AttributeError:
        return str(exc)
    if not errors:
        return str(exc)
    message = errors[0].get("msg", str(exc))
    return message.removeprefix("Value error, ")
