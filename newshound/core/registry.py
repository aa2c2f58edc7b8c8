"""Source registry.

Maps symbolic source names to adapter factories. Host applications register
their own adapters at startup; names that were never registered fall back to
a static table of built-in adapters keyed by type name, so "solid_errors"
finds the built-in "SolidErrors" adapter.
"""

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)

SourceFactory = Callable[["Settings"], Any]


class UnknownSourceError(LookupError):
    """Raised when a source name resolves to no adapter."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Invalid {kind} source: {name}")


def camelize(name: str) -> str:
    """Convert a snake_case source name into its adapter type name.

    >>> camelize("exception_track")
    'ExceptionTrack'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


class SourceRegistry:
    """Registry of adapter factories for one source category."""

    def __init__(self, kind: str, builtins: Mapping[str, SourceFactory] | None = None):
        """Initialize registry.

        Args:
            kind: Category name used in error messages ("exception", "job", ...).
            builtins: Built-in adapter factories keyed by type name.
        """
        self.kind = kind
        self._builtins: dict[str, SourceFactory] = dict(builtins or {})
        self._registry: dict[str, SourceFactory] = {}

    @property
    def registered(self) -> dict[str, SourceFactory]:
        """Snapshot of explicitly registered factories."""
        return dict(self._registry)

    def register(self, name: str, factory: SourceFactory) -> None:
        """Register an adapter factory under a name, replacing any previous one.

        Args:
            name: Symbolic name used in configuration.
            factory: Callable receiving the Settings and returning an adapter.
                An adapter class whose __init__ accepts settings works as-is.
        """
        self._registry[name] = factory
        logger.debug(f"Registered {self.kind} source: {name}")

    def resolve(self, source: Any, settings: "Settings") -> Any:
        """Resolve a source reference into an adapter instance.

        Args:
            source: A registry name, or an adapter instance (returned as-is).
            settings: Settings handed to the factory.

        Returns:
            Adapter instance.

        Raises:
            UnknownSourceError: If a name matches no registered or built-in adapter.
        """
        if not isinstance(source, str):
            return source

        factory = self._registry.get(source)
        if factory is None:
            factory = self._builtins.get(camelize(source))
        if factory is None:
            raise UnknownSourceError(self.kind, source)

        return factory(settings)

    def clear(self) -> None:
        """Remove all explicit registrations (test support)."""
        self._registry.clear()
