"""Domain models for Newshound.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, TypeAlias


@dataclass(frozen=True)
class ExceptionDetails:
    """Fields parsed out of a source's structured detail blob.

    Every field is optional; an unparseable blob yields an instance with
    all fields set to None.
    """

    title: str | None = None
    message: str | None = None
    controller_name: str | None = None
    action_name: str | None = None

    @property
    def location(self) -> str:
        """'controller#action' when both parts are known, else ''."""
        if self.controller_name and self.action_name:
            return f"{self.controller_name}#{self.action_name}"
        return ""


@dataclass(frozen=True)
class ReportRecord:
    """Normalized view of one exception or warning for the banner.

    Produced fresh per adapter call; never persisted.
    """

    title: str
    message: str
    location: str
    time: str

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if len(self.message) > 100:
            raise ValueError(
                f"message must be at most 100 characters, got {len(self.message)}"
            )


class BlockType(Enum):
    """Digest block kinds."""

    HEADER = "header"
    SECTION = "section"
    DIVIDER = "divider"


@dataclass(frozen=True)
class Block:
    """A single typed block of a digest message.

    Section text uses Slack mrkdwn (`*bold*`, `` `code` ``); header text is
    plain. Dividers carry no text.
    """

    type: BlockType
    text: str = ""

    @classmethod
    def header(cls, text: str) -> "Block":
        return cls(BlockType.HEADER, text)

    @classmethod
    def section(cls, text: str) -> "Block":
        return cls(BlockType.SECTION, text)

    @classmethod
    def divider(cls) -> "Block":
        return cls(BlockType.DIVIDER)

    def to_dict(self) -> dict[str, Any]:
        """Render as a Slack Block Kit dictionary."""
        if self.type is BlockType.DIVIDER:
            return {"type": "divider"}
        if self.type is BlockType.HEADER:
            return {
                "type": "header",
                "text": {"type": "plain_text", "text": self.text, "emoji": True},
            }
        return {"type": "section", "text": {"type": "mrkdwn", "text": self.text}}


@dataclass(frozen=True)
class DigestMessage:
    """A composed digest, handed to exactly one transport for delivery."""

    blocks: tuple[Block, ...]
    text: str = "Daily Newshound Report"
    subject: str = "Newshound Notification"

    def to_payload(self) -> dict[str, Any]:
        """Slack message payload with blocks and fallback text."""
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "text": self.text,
        }


@dataclass(frozen=True)
class QueueStatistics:
    """Queue-level job counts reported by a job source."""

    ready: int = 0
    scheduled: int = 0
    failed: int = 0
    finished_today: int = 0


@dataclass
class JobTypeCounts:
    """Job counts for a single job class.

    Mutable so a source can accumulate grouped rows into it.
    """

    success: int = 0
    failed: int = 0
    total: int = 0


@dataclass(frozen=True)
class BannerQueueStats:
    """Job queue figures shown in the banner's stat grid."""

    ready: int = 0
    scheduled: int = 0
    failed: int = 0
    completed_today: int = 0


class QueueHealth(Enum):
    """Job queue health tier, derived from the failed-job count."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    CRITICAL = "critical"

    @property
    def emoji(self) -> str:
        return _HEALTH_EMOJI[self]

    @classmethod
    def from_failed_count(cls, failed: int) -> "QueueHealth":
        """Classify queue health; thresholds are strictly greater-than."""
        if failed > 10:
            return cls.CRITICAL
        if failed > 5:
            return cls.DEGRADED
        return cls.HEALTHY


_HEALTH_EMOJI = {
    QueueHealth.HEALTHY: "🟢",
    QueueHealth.DEGRADED: "🟡",
    QueueHealth.CRITICAL: "🔴",
}


BadgeLevel: TypeAlias = Literal["error", "warning", "success"]


@dataclass(frozen=True)
class SeverityBadge:
    """Summary badge shown in the banner header."""

    level: BadgeLevel
    text: str

    @property
    def css_class(self) -> str:
        return f"newshound-{self.level}"


@dataclass(frozen=True)
class BannerPayload:
    """Everything the banner renderer needs for one response."""

    exceptions: tuple[ReportRecord, ...] = ()
    warnings: tuple[ReportRecord, ...] = ()
    queue_stats: BannerQueueStats | None = None
    badge: SeverityBadge = field(
        default_factory=lambda: SeverityBadge("success", "All clear")
    )
    window_hours: int = 24
