"""AWS SNS transport.

Implements TransportPort by publishing to an SNS topic. Block digests are
flattened into plain text, since SNS subscribers (email, SMS, queues) do
not understand Slack markup.
"""

import asyncio
import json
import logging
import re
from typing import Any

from newshound.config import Settings
from newshound.core.models import Block, BlockType, DigestMessage
from newshound.core.ports import TransportPort

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Newshound Notification"

_EMOJI_SHORTCODE = re.compile(r":([a-z_]+):")
_BOLD = re.compile(r"\*(.+?)\*")
_ITALIC = re.compile(r"_(.+?)_")


def strip_markup(text: str) -> str:
    """Remove emoji shortcodes and *bold* / _italic_ markers."""
    text = _EMOJI_SHORTCODE.sub("", text)
    text = _BOLD.sub(r"\1", text)
    return _ITALIC.sub(r"\1", text)


def flatten_blocks(blocks: list[dict[str, Any]] | tuple[Block, ...]) -> str:
    """Render digest blocks as plain text separated by blank lines."""
    lines = []
    for block in blocks:
        if isinstance(block, Block):
            block_type, text = block.type.value, block.text
        else:
            block_type = block.get("type")
            text_element = block.get("text") or {}
            text = text_element.get("text", "") if isinstance(text_element, dict) else str(text_element)

        if block_type == BlockType.SECTION.value and text:
            lines.append(strip_markup(text))
        elif block_type == BlockType.HEADER.value and text:
            lines.append(f"=== {strip_markup(text)} ===")
        elif block_type == BlockType.DIVIDER.value:
            lines.append("---")
    return "\n\n".join(lines)


class SNSTransport(TransportPort):
    """Publishes messages to an SNS topic with boto3."""

    def __init__(self, settings: Settings, sns_client: Any | None = None):
        """Initialize SNS transport.

        Args:
            settings: Application settings with topic ARN and AWS credentials.
            sns_client: Optional boto3 SNS client; built from settings if omitted.
        """
        self.settings = settings
        self.sns_client = sns_client or self._build_sns_client()

    def _build_sns_client(self) -> Any:
        """Create a boto3 SNS client, using explicit keys when both are set."""
        # Lazy import for optional AWS dependency
        import boto3

        options: dict[str, Any] = {"region_name": self.settings.aws_region or "us-east-1"}
        if self.settings.aws_access_key_id and self.settings.aws_secret_access_key:
            options["aws_access_key_id"] = self.settings.aws_access_key_id
            options["aws_secret_access_key"] = self.settings.aws_secret_access_key
        return boto3.client("sns", **options)

    async def deliver(self, message: DigestMessage | dict[str, Any] | str) -> bool:
        """Publish the message to the configured topic."""
        if not self.settings.sns_topic_arn:
            logger.error("SNS topic ARN not configured", extra={"transport": "sns"})
            return False

        try:
            response = await asyncio.to_thread(
                self.sns_client.publish,
                TopicArn=self.settings.sns_topic_arn,
                Message=self.format_message(message),
                Subject=self.extract_subject(message),
            )
        except Exception as e:
            logger.error(
                f"Failed to send SNS notification: {e}",
                extra={"transport": "sns", "topic_arn": self.settings.sns_topic_arn},
            )
            return False

        logger.info(
            f"Message sent to SNS, MessageId: {response.get('MessageId')}",
            extra={"transport": "sns"},
        )
        return True

    @staticmethod
    def format_message(message: DigestMessage | dict[str, Any] | str) -> str:
        """Plain-text body: flattened blocks, pretty JSON, or the string itself."""
        if isinstance(message, DigestMessage):
            return flatten_blocks(message.blocks)
        if isinstance(message, dict):
            if message.get("blocks"):
                return flatten_blocks(message["blocks"])
            return json.dumps(message, indent=2, default=str)
        return str(message)

    @staticmethod
    def extract_subject(message: DigestMessage | dict[str, Any] | str) -> str:
        """SNS subjects are limited to 100 characters."""
        if isinstance(message, DigestMessage):
            subject = message.subject
        elif isinstance(message, dict):
            subject = message.get("subject") or DEFAULT_SUBJECT
        else:
            subject = DEFAULT_SUBJECT
        return subject[:100]
