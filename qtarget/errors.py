"""Error taxonomy for the target-selection agent.

Nothing in the library catches these; they surface to the host process.
"""

from __future__ import annotations


class QTargetError(Exception):
    """Base class for all agent errors."""


class ConfigurationError(QTargetError, ValueError):
    """Missing or invalid startup parameter."""

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class ContractViolation(QTargetError, RuntimeError):
    """A caller broke an invariant (unknown unit id, empty enemy roster, ...)."""


class NumericalInstabilityError(QTargetError, ArithmeticError):
    """Weight normalization would divide by zero or produce non-finite weights."""
