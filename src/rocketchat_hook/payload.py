"""Rocket.Chat incoming-webhook payload.

Field order on the structs is the key order of the encoded JSON document.
"""

from __future__ import annotations

from collections.abc import Sequence

import msgspec

from .config import NotificationConfig
from .model import CommitSummary
from .render import link


class Attachment(msgspec.Struct):
    title_link: str
    title: str
    text: str


class Payload(msgspec.Struct, omit_defaults=True):
    text: str
    attachments: list[Attachment] = []
    channel: str | None = None
    username: str | None = None
    icon_url: str | None = None
    icon_emoji: str | None = None


def attachment_for(summary: CommitSummary) -> Attachment:
    text = summary.message
    if summary.link:
        text = f"{link(summary.link, summary.short_hash)} {text}"
    return Attachment(
        title_link=summary.link or "",
        title=f"{summary.author_name} {summary.short_hash}",
        text=text,
    )


def build_payload(
    header: str,
    commits: Sequence[CommitSummary],
    config: NotificationConfig,
    *,
    recipients: str | None = None,
) -> Payload:
    return Payload(
        text=header,
        attachments=[attachment_for(summary) for summary in commits],
        channel=recipients or config.channel,
        username=config.username,
        icon_url=config.icon_url,
        icon_emoji=None if config.icon_url else config.icon_emoji,
    )


def encode_payload(payload: Payload) -> bytes:
    return msgspec.json.encode(payload)
