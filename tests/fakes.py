from __future__ import annotations

from dataclasses import dataclass, field

from rocketchat_hook.git import LogEntry
from rocketchat_hook.model import ObjectKind

ZERO = "0" * 40
OLD = "a" * 40
NEW = "b" * 40
HEAD_ID = "e" * 40


@dataclass
class FakeGit:
    """In-memory stand-in for both the git query client and config store."""

    objects: dict[str, ObjectKind] = field(default_factory=dict)
    logs: dict[str, list[LogEntry]] = field(default_factory=dict)
    config: dict[str, str] = field(default_factory=dict)
    refs: dict[str, str] = field(default_factory=lambda: {"HEAD": HEAD_ID})
    log_calls: list[tuple[str, int | None]] = field(default_factory=list)

    def rev_parse(self, rev: str) -> str:
        return self.refs.get(rev, rev)

    def object_type(self, rev: str) -> ObjectKind:
        return self.objects.get(rev, ObjectKind.UNKNOWN)

    def log(self, rev_range: str, *, max_count: int | None = None) -> list[LogEntry]:
        self.log_calls.append((rev_range, max_count))
        entries = self.logs.get(rev_range, [])
        if max_count is not None:
            return entries[:max_count]
        return list(entries)

    def count_commits(self, rev_range: str) -> int:
        return len(self.logs.get(rev_range, []))

    def get(self, key: str) -> str | None:
        return self.config.get(key)


def entry(
    short_hash: str,
    subject: str,
    *,
    committer: str = "Ada Lovelace",
    body: str = "",
) -> LogEntry:
    return LogEntry(committer=committer, short_hash=short_hash, subject=subject, body=body)


def commits(count: int) -> list[LogEntry]:
    return [entry(f"c{index:06d}", f"change {index}") for index in range(count, 0, -1)]
