"""
Exception hierarchy for Splitshare.

Calculator errors are contract violations raised by the split engine;
FormValidationError is the user-facing rejection produced while parsing
raw bill input, before the engine is ever called.
"""

from typing import Optional


class SplitError(Exception):
    """Base exception for all Splitshare errors."""
    pass


class InvalidInputError(SplitError):
    """Raised when a calculation gets structurally impossible input."""
    pass


class InvalidLineItemError(SplitError):
    """Raised when a line item has a negative, non-numeric or missing price."""

    def __init__(self, item_id: str, message: Optional[str] = None):
        self.item_id = item_id
        super().__init__(message or f"Invalid price for line item {item_id!r}")


class FormValidationError(SplitError):
    """Bill form input rejected before calculation."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
