# slotbot/database/__init__.py
from .session import Database

__all__ = ["Database"]
