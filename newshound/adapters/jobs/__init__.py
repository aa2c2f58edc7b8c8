"""Job source adapters.

Implementations support multiple job queues:
- Que (``que_jobs`` table)
"""

from newshound.core.registry import SourceRegistry

from .que import QueJobSource

JOB_SOURCES = SourceRegistry("job", builtins={"Que": QueJobSource})

__all__ = ["JOB_SOURCES", "QueJobSource"]
