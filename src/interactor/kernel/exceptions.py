"""Unified exception hierarchy for interactor.

All library exceptions inherit from InteractorException, enabling unified
error handling across modules.

Categories:
- BusinessException: declared business outcomes (``Failure``)
- InvalidArgumentException: caller contract violations such as a missing
  required attribute
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from interactor.context.context import Context


# =============================================================================
# Base Exception
# =============================================================================


class InteractorException(Exception):
    """Base exception for all interactor errors.

    Carries an optional error code and context dict for structured error data.
    Catch InteractorException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "MISSING_ATTRIBUTE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: Any = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(InteractorException):
    """Declared business outcomes, as opposed to defects."""


class Failure(BusinessException):
    """Raised by :meth:`Context.fail`.

    ``context`` is the failed :class:`~interactor.context.Context` itself, so a
    rescuer can read whatever attributes were merged in before the failure.
    """

    def __init__(self, context: Context) -> None:
        super().__init__(repr(context), code="BUSINESS_FAILURE")
        self.context = context


# =============================================================================
# Caller Contract Exceptions
# =============================================================================


class InvalidArgumentException(InteractorException, ValueError):
    """An interactor or context was given arguments it cannot accept."""


class MissingAttributeException(InvalidArgumentException):
    """A required context attribute was absent when an interactor was invoked.

    Only the first missing attribute (in declaration order) is named in the
    message; the full list is available under ``context["missing"]``.
    """

    def __init__(self, attribute: str, missing: list[str] | None = None) -> None:
        super().__init__(
            f"Required attribute {attribute} is missing",
            code="MISSING_ATTRIBUTE",
            context={"attribute": attribute, "missing": list(missing or [attribute])},
        )
        self.attribute = attribute
