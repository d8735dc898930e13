"""
Khata Undo — Public API
=========================
Time-limited undo of the most recent deletion.
"""

from core.undo.buffer import Restorer, UndoBuffer, UndoEntry
from core.undo.restore import RestoreRequest

__all__ = [
    "Restorer",
    "RestoreRequest",
    "UndoBuffer",
    "UndoEntry",
]
