"""Core reporting logic for Newshound.

This package contains zero external dependencies and represents the pure
reporting logic: models, ports, the source registry, reporters, report
composition and banner rendering. All backends and delivery channels are
handled by the adapters package.
"""

from .models import (
    BannerPayload,
    BannerQueueStats,
    Block,
    BlockType,
    DigestMessage,
    ExceptionDetails,
    JobTypeCounts,
    QueueHealth,
    QueueStatistics,
    ReportRecord,
    SeverityBadge,
)

__all__ = [
    "BannerPayload",
    "BannerQueueStats",
    "Block",
    "BlockType",
    "DigestMessage",
    "ExceptionDetails",
    "JobTypeCounts",
    "QueueHealth",
    "QueueStatistics",
    "ReportRecord",
    "SeverityBadge",
]
