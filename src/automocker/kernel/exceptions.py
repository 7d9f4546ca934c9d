"""Unified exception hierarchy for automocker.

All library exceptions inherit from AutomockerException, so a test can
catch one base class for any container failure or a specific subclass
for targeted assertions.

Categories:
- ResolutionException: failures while building a subject or its mocks
- RegistrationException: misuse of the mock / implementation registries
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class AutomockerException(Exception):
    """Base exception for all automocker errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NO_VALID_CONSTRUCTORS").
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
        self.context: dict = context if context is not None else {}


# =============================================================================
# Categories
# =============================================================================


class ResolutionException(AutomockerException):
    """A subject or one of its dependencies could not be produced."""


class RegistrationException(AutomockerException):
    """A registry operation was given an unusable value."""
