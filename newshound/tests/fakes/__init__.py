"""Fake implementations of core ports for testing.

These in-memory implementations allow core reporting logic to be tested
without a database or network:

- FakeExceptionSource: Canned exception records
- FakeWarningSource: Canned warning records
- FakeJobSource: Canned queue statistics and job counts
- FakeTransport: Captured deliveries for assertion
- FakeDatabase: Canned query results with captured queries
"""

from .database import FakeDatabase
from .sources import FakeExceptionSource, FakeJobSource, FakeRecord, FakeWarningSource
from .transport import FakeTransport

__all__ = [
    "FakeDatabase",
    "FakeExceptionSource",
    "FakeJobSource",
    "FakeRecord",
    "FakeTransport",
    "FakeWarningSource",
]
