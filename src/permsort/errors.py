"""
Exception types raised by permsort containers.

Invalid arguments use the builtin ``ValueError`` / ``TypeError``; the types
below cover the two conditions that have no builtin equivalent.
"""

from __future__ import annotations

__all__ = ["UnsupportedOperationError", "NoSuchElementError"]


class UnsupportedOperationError(NotImplementedError):
    """Raised for a structural operation a container permanently refuses."""

    def __init__(self, operation: str, reason: str = "would violate sorted order") -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported: {reason}")


class NoSuchElementError(LookupError):
    """Raised when first()/last() is requested from an empty container."""
