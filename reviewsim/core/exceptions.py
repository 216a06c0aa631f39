"""
Custom Exceptions for Reviewsim

Provides specific exception types for different failure modes.
Guard failures never escape a simulation run: the CycleSimulator
catches SimulationHalted and returns it as a structured Halt value.
"""

from typing import Any, Dict, Optional

from reviewsim.core.models import HaltReason


class ReviewsimError(Exception):
    """Base exception for all Reviewsim errors."""
    pass


class SimulationHalted(ReviewsimError):
    """
    Raised by the guard rail when a cycle may not be committed.

    Carries the reason tag, the cycle being evaluated and any numbers
    the caller needs to explain the halt.
    """

    reason: HaltReason

    def __init__(
        self,
        message: str,
        cycle: int = 0,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.cycle = cycle
        self.details = details or {}


class InsufficientBalance(SimulationHalted):
    """Raised when the balance cannot cover the cycle's stake requirement."""
    reason = HaltReason.INSUFFICIENT_BALANCE


class InvalidWeightConfiguration(SimulationHalted):
    """
    Raised when weights do not sum to 1, name an unknown sub-score,
    or produce a non-positive aggregate system weight.
    """
    reason = HaltReason.INVALID_WEIGHT_CONFIGURATION


class ReputationCeilingViolation(SimulationHalted):
    """Raised when reputation exceeds the configured ceiling."""
    reason = HaltReason.REPUTATION_CEILING_VIOLATION


class InvalidSystemState(SimulationHalted):
    """Raised when the total stake in the system is not positive."""
    reason = HaltReason.INVALID_SYSTEM_STATE


class UnknownPreset(ReviewsimError):
    """Raised when a preset scenario or weight system name is not registered."""
    pass
