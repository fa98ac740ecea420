"""
Shared fixtures for the NSLI tracker test suite.

Everything runs against the in-memory collaborators; no external
services are touched.
"""

from datetime import date

import pytest

from nsli_tracker.collaborators import InMemoryIdentityProvider, InMemoryTrackerStore
from nsli_tracker.config import Settings
from nsli_tracker.core.entities import Entry
from nsli_tracker.use_cases import TrackerSession


# 2024-06-15 is a Saturday
REFERENCE = date(2024, 6, 15)


@pytest.fixture
def reference():
    return REFERENCE


@pytest.fixture
def sample_entries():
    """Entries spread across the windows of the reference date."""
    return [
        Entry(id="a", date=date(2024, 6, 10), sales=6000, leads=1),
        Entry(id="b", date=date(2024, 6, 11), sales=0, leads=1),
        Entry(id="c", date=date(2024, 6, 15), sales=2000, leads=1),
        Entry(id="d", date=date(2024, 6, 1), sales=4000, leads=2, cancellations=500),
        Entry(id="e", date=date(2024, 5, 16), sales=1000, leads=1),
        Entry(id="f", date=date(2024, 5, 15), sales=3000, leads=1),
        Entry(id="g", date=date(2023, 11, 1), sales=7000, leads=2),
        Entry(id="h", date=date(2023, 10, 31), sales=9999, leads=1),
    ]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def identity():
    return InMemoryIdentityProvider()


@pytest.fixture
def store():
    return InMemoryTrackerStore()


@pytest.fixture
def session(identity, store, settings):
    """A started session, signed out."""
    tracker = TrackerSession(identity, store, settings=settings, today=lambda: REFERENCE)
    tracker.start()
    yield tracker
    tracker.close()


@pytest.fixture
def signed_in_session(session):
    session.sign_up("seller@example.com", "secret-pw", "Seller")
    return session
