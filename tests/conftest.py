import logging
from pathlib import Path

import pytest

from rocketchat_hook.environment import Environment
from rocketchat_hook.logging import SafeStreamHandler
from rocketchat_hook.model import ObjectKind
from tests.fakes import NEW, OLD, FakeGit


@pytest.fixture(autouse=True)
def _drop_stream_handlers():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, SafeStreamHandler):
            root.removeHandler(handler)


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit(
        objects={OLD: ObjectKind.COMMIT, NEW: ObjectKind.COMMIT},
        config={"hooks.rocketchat.webhook-url": "https://chat.example.com/hooks/abc/def"},
    )


@pytest.fixture
def env(tmp_path: Path) -> Environment:
    repo = tmp_path / "repos" / "group" / "project.git"
    repo.mkdir(parents=True)
    return Environment(cwd=repo, git_dir=".", user="alice")
