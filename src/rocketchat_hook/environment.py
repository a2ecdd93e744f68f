from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Environment:
    """Process environment the hook depends on, captured once at startup."""

    cwd: Path
    git_dir: str | None = None
    gl_repo: str | None = None
    gl_user: str | None = None
    user: str | None = None
    debug: bool = False

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None, cwd: Path | None = None
    ) -> Environment:
        env = os.environ if environ is None else environ
        return cls(
            cwd=Path.cwd() if cwd is None else cwd,
            git_dir=env.get("GIT_DIR") or None,
            gl_repo=env.get("GL_REPO") or None,
            gl_user=env.get("GL_USER") or None,
            user=env.get("USER") or None,
            debug=bool(env.get("DEBUG")),
        )

    @property
    def repo_name(self) -> str:
        """Gitolite repo name, else the directory name without ``.git``."""
        if self.gl_repo:
            return self.gl_repo
        repo_dir = self.cwd
        if repo_dir.name == ".git":
            repo_dir = repo_dir.parent
        return repo_dir.name.removesuffix(".git")

    @property
    def pusher(self) -> str | None:
        return self.gl_user or self.user
