"""Shared error classes for the coaching engine and its collaborators."""

from __future__ import annotations


class CoachingError(RuntimeError):
    """Base exception raised by the coaching engine."""

    def __init__(self, message: str, code: str = "COACHING_ENGINE_ERROR") -> None:
        super().__init__(message)
        self.code = code


class InvalidInputError(CoachingError):
    """Raised when a lead record or clock value cannot be coerced."""

    def __init__(self, message: str, code: str = "422_INVALID_LEAD") -> None:
        super().__init__(message, code=code)


class CoachingProviderError(CoachingError):
    """Raised when the upstream AI provider fails."""


class CoachingValidationError(CoachingError):
    """Raised when a model response cannot be parsed safely."""


class SignalConfigError(CoachingError):
    """Raised when signal tables cannot be loaded or validated."""

    def __init__(self, message: str, code: str = "SIGNALS_LOAD_ERROR") -> None:
        super().__init__(message, code=code)
