"""Test suite for Newshound.

Organized into three categories:

1. core/: Unit tests for reporting logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Real temporary SQLite databases, mocked HTTP and AWS clients
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementations of ExceptionSource, JobSource, TransportPort, etc.
   - Used by core unit tests
"""
