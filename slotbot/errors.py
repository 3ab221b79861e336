# slotbot/errors.py
from __future__ import annotations


class ValidationError(ValueError):
    """Request input rejected before any state is touched."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
