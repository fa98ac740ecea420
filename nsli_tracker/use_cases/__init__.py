"""
Use Cases

The interactive tracker session: view state, forms, and the wiring
between the collaborators and the metrics engine.
"""

from .session import TrackerSession, View, EntryFormState

__all__ = [
    "TrackerSession",
    "View",
    "EntryFormState"
]
