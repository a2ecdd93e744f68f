from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .config import NotificationConfig
from .logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"%([a-z_]+)%")


def render_template(pattern: str, values: dict[str, str]) -> str:
    """Substitute ``%name%`` placeholders; unknown names are left as written."""

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_replace, pattern)


def relative_repo_path(cwd: Path, repos_root: Path) -> str | None:
    """Path of the repository below ``repos_root``, with a leading slash."""
    cwd_str = str(cwd)
    root_str = str(repos_root)
    if not cwd_str.startswith(root_str):
        return None
    repo_dir = cwd.parent if cwd.name == ".git" else cwd
    return str(repo_dir)[len(root_str) :]


@dataclass(frozen=True, slots=True)
class RepoLinks:
    changeset_pattern: str
    compare_pattern: str | None
    values: dict[str, str]

    def changeset_url(self, rev_hash: str) -> str:
        return render_template(self.changeset_pattern, {**self.values, "rev_hash": rev_hash})

    def compare_url(self) -> str | None:
        if self.compare_pattern is None:
            return None
        return render_template(self.compare_pattern, self.values)


def build_repo_links(
    config: NotificationConfig,
    *,
    cwd: Path,
    old_id: str,
    new_id: str,
) -> RepoLinks | None:
    """Hyperlink templates for one ref update, or ``None`` when links are off.

    Links need both a changeset pattern and ``repos-root``, and the repository
    has to live below that root.
    """
    if not config.changeset_url_pattern or config.repos_root is None:
        return None
    repo_path = relative_repo_path(cwd, config.repos_root)
    if repo_path is None:
        logger.warning(
            "links.outside_repos_root",
            cwd=str(cwd),
            repos_root=str(config.repos_root),
            detail="not creating hyperlinks",
        )
        return None
    return RepoLinks(
        changeset_pattern=config.changeset_url_pattern,
        compare_pattern=config.compare_url_pattern,
        values={
            "repo_path": repo_path,
            "repo_prefix": config.repo_name,
            "old_rev_hash": old_id,
            "new_rev_hash": new_id,
            "rev_hash": new_id,
        },
    )
