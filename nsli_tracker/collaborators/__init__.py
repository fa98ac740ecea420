"""
External Collaborators

Identity and storage are owned by external services. This package holds
their contracts, in-memory implementations, and the schemas used to
coerce form input before it is written.
"""

from .errors import TrackerError, StorageError, AuthenticationError
from .identity import IdentityProvider, InMemoryIdentityProvider, User
from .storage import TrackerStore, InMemoryTrackerStore
from .schemas import EntryForm, GoalsForm, coerce_number

__all__ = [
    "TrackerError",
    "StorageError",
    "AuthenticationError",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "User",
    "TrackerStore",
    "InMemoryTrackerStore",
    "EntryForm",
    "GoalsForm",
    "coerce_number"
]
