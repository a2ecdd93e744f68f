from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .logging import get_logger
from .model import ObjectKind

logger = get_logger(__name__)

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
LOG_FORMAT = f"%cN{_FIELD_SEP}%h{_FIELD_SEP}%s{_FIELD_SEP}%b{_RECORD_SEP}"


class GitError(RuntimeError):
    pass


class GitNotFoundError(GitError):
    pass


@dataclass(frozen=True, slots=True)
class LogEntry:
    committer: str
    short_hash: str
    subject: str
    body: str


class VersionControlClient(Protocol):
    def rev_parse(self, rev: str) -> str: ...

    def object_type(self, rev: str) -> ObjectKind: ...

    def log(self, rev_range: str, *, max_count: int | None = None) -> list[LogEntry]: ...

    def count_commits(self, rev_range: str) -> int: ...


class ConfigStore(Protocol):
    def get(self, key: str) -> str | None: ...


def parse_log(output: str) -> list[LogEntry]:
    entries: list[LogEntry] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        committer, short_hash, subject, body = (record.split(_FIELD_SEP, 3) + [""] * 4)[:4]
        entries.append(
            LogEntry(
                committer=committer,
                short_hash=short_hash,
                subject=subject,
                body=body.strip(),
            )
        )
    return entries


class GitClient:
    """Queries a repository through the ``git`` command line."""

    def __init__(self, cwd: Path | None = None, *, executable: str = "git") -> None:
        if shutil.which(executable) is None:
            raise GitNotFoundError(f"{executable} is not installed or not in PATH.")
        self._cwd = cwd
        self._executable = executable

    def _run(
        self, args: list[str], *, check: bool = True
    ) -> subprocess.CompletedProcess[str]:
        cmd = [self._executable, *args]
        logger.debug("git.run", cmd=" ".join(cmd), cwd=str(self._cwd))
        result = subprocess.run(
            cmd,
            cwd=self._cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if check and result.returncode != 0:
            raise GitError(f"git {args[0]} failed: {result.stderr.strip()}")
        return result

    def rev_parse(self, rev: str) -> str:
        result = self._run(["rev-parse", rev], check=False)
        if result.returncode != 0:
            return rev
        return result.stdout.strip() or rev

    def object_type(self, rev: str) -> ObjectKind:
        result = self._run(["cat-file", "-t", rev], check=False)
        if result.returncode != 0:
            return ObjectKind.UNKNOWN
        try:
            return ObjectKind(result.stdout.strip())
        except ValueError:
            return ObjectKind.UNKNOWN

    def log(self, rev_range: str, *, max_count: int | None = None) -> list[LogEntry]:
        args = ["log", f"--pretty=format:{LOG_FORMAT}"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")
        args.append(rev_range)
        return parse_log(self._run(args).stdout)

    def count_commits(self, rev_range: str) -> int:
        output = self._run(["rev-list", "--count", rev_range]).stdout.strip()
        try:
            return int(output)
        except ValueError:
            raise GitError(f"git rev-list returned {output!r}") from None

    def get(self, key: str) -> str | None:
        """Read one config value; ``None`` when the key is unset."""
        result = self._run(["config", "--get", key], check=False)
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise GitError(f"git config failed: {result.stderr.strip()}")
        return result.stdout.rstrip("\n")
