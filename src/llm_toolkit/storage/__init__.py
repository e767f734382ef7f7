"""
Stockage optionnel des sessions.
"""

from .sessions import SessionStorage

__all__ = ["SessionStorage"]
