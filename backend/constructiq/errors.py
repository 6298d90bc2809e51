# backend/constructiq/errors.py
from typing import Any, List, Optional


class ConstructIQError(Exception):
    """Base class for errors raised by the data core"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(ConstructIQError):
    """Required field missing or malformed; nothing was mutated"""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidOperation(ConstructIQError):
    """Structural rule violated, e.g. moving a folder under its own descendant"""


class PersistenceFailure(ConstructIQError):
    """The persistence adapter could not store the change"""
