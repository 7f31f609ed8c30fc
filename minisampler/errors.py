"""Exception types raised by the sampling engine.

All errors derive from :class:`SamplingError`, which is itself a
``ValueError`` so callers that already guard sampling calls with
``except ValueError`` keep working.
"""

from typing import Any, Dict, Optional

__all__ = [
    'SamplingError',
    'InvalidDistribution',
    'InvalidConfig',
    'ExpansionMismatch',
]


class SamplingError(ValueError):
    """Base class for sampling engine failures."""

    def __init__(self,
                 message: str,
                 details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable description of the failure.
            details: Optional structured context (offending values, sizes).
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for structured reporting."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
        }


class InvalidDistribution(SamplingError):
    """Distribution is empty, has negative or non-finite entries, or has no
    probability mass left after filtering."""


class InvalidConfig(SamplingError):
    """A sampling or search parameter is out of range."""


class ExpansionMismatch(SamplingError):
    """An expansion function returned states and probabilities of different
    lengths."""
