"""Domain types for ref updates, their classification and commit summaries."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ZERO_ID_CHARS = frozenset("0")


class ChangeType(enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ObjectKind(enum.Enum):
    COMMIT = "commit"
    TAG = "tag"
    UNKNOWN = "unknown"


class RefKind(enum.Enum):
    BRANCH = "branch"
    TAG = "tag"
    ANNOTATED_TAG = "annotated tag"
    TRACKING_BRANCH = "tracking branch"
    UNRECOGNIZED = "unknown"

    @property
    def label(self) -> str:
        return self.value

    @property
    def notifies(self) -> bool:
        return self not in (RefKind.TRACKING_BRANCH, RefKind.UNRECOGNIZED)


@dataclass(frozen=True, slots=True)
class RefUpdate:
    old_id: str
    new_id: str
    ref_name: str

    @classmethod
    def parse(cls, line: str) -> RefUpdate | None:
        """Parse one ``<old> <new> <ref>`` line; ``None`` for a malformed line."""
        fields = line.split()
        if len(fields) < 3:
            return None
        return cls(old_id=fields[0], new_id=fields[1], ref_name=fields[2])


@dataclass(frozen=True, slots=True)
class Classification:
    change_type: ChangeType
    ref_kind: RefKind
    short_ref: str
    old_id: str
    new_id: str
    recipients: str | None = None


@dataclass(frozen=True, slots=True)
class CommitSummary:
    author_name: str
    short_hash: str
    subject: str
    body: str | None = None
    link: str | None = None

    @property
    def message(self) -> str:
        if self.body:
            return f"{self.subject}\n\n{self.body}"
        return self.subject


def is_zero_id(value: str) -> bool:
    return set(value) <= ZERO_ID_CHARS
