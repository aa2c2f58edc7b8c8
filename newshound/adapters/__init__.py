"""External adapters for Newshound.

This package contains all external dependencies (databases, Slack, SNS,
aiohttp, ...) and provides implementations of the core port interfaces.

Adapter Organization:

- exceptions/: Exception sources (ExceptionTrack, SolidErrors) and their registry
- warnings/: Warning source registry (application-provided sources)
- jobs/: Job queue sources (Que) and their registry
- database/: Read-only database access (SQLite, PostgreSQL)
- transport/: Digest delivery (Slack webhook / Web API, AWS SNS)
- web/: Banner injection middleware for aiohttp
- scheduler/: Daily report schedule entry and job
"""
