from __future__ import annotations

from .git import LogEntry, VersionControlClient
from .links import RepoLinks
from .logging import get_logger
from .model import ChangeType, Classification, CommitSummary

logger = get_logger(__name__)

HEAD = "HEAD"


def range_start(classification: Classification) -> str:
    """Updates list what the push added; creates list what ``HEAD`` lacks."""
    if classification.change_type is ChangeType.UPDATE:
        return classification.old_id
    return HEAD


def summarize(
    entry: LogEntry,
    *,
    full_commit: bool = False,
    links: RepoLinks | None = None,
) -> CommitSummary:
    return CommitSummary(
        author_name=entry.committer,
        short_hash=entry.short_hash,
        subject=entry.subject,
        body=(entry.body or None) if full_commit else None,
        link=links.changeset_url(entry.short_hash) if links is not None else None,
    )


def format_commits(
    vcs: VersionControlClient,
    start: str,
    end: str,
    *,
    only_last: bool = False,
    full_commit: bool = False,
    links: RepoLinks | None = None,
) -> list[CommitSummary]:
    """Summaries for ``start..end``, newest first, at most one if ``only_last``."""
    if start == HEAD and vcs.rev_parse(HEAD) == HEAD:
        logger.debug("commits.unborn_head", end=end)
        return []
    entries = vcs.log(f"{start}..{end}", max_count=1 if only_last else None)
    return [
        summarize(entry, full_commit=full_commit, links=links) for entry in entries
    ]
