"""
Exception types raised by the classification engine and the mode registry.
"""

from typing import Optional


class SynpadError(Exception):
    """Base class for all synpad errors."""


class StorageError(SynpadError):
    """Reading or writing the custom mode store failed."""

    def __init__(self, message: str, path: Optional[str] = None, operation: str = 'read') -> None:
        super().__init__(message)
        self.path = path
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"{self.operation} {self.path}: {message}"

        return f"{self.operation}: {message}"


class DefinitionError(SynpadError):
    """A custom language definition record is malformed."""
