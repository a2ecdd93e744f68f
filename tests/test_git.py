import subprocess
from pathlib import Path

import pytest

from rocketchat_hook.git import GitClient, GitError, parse_log
from rocketchat_hook.model import ObjectKind


def run_git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    run_git(["init", "-b", "main"], path)
    run_git(["config", "user.email", "test@test.com"], path)
    run_git(["config", "user.name", "Test User"], path)
    for index, message in enumerate(["first", 'second "quoted"\n\nbody line\\x']):
        (path / f"file{index}.txt").write_text(f"{index}\n")
        run_git(["add", "."], path)
        run_git(["commit", "-m", message], path)
    run_git(["tag", "light"], path)
    run_git(["tag", "-a", "v1", "-m", "release"], path)
    return path


def test_rev_parse_and_object_type(repo: Path) -> None:
    client = GitClient(repo)
    head = client.rev_parse("HEAD")
    assert len(head) == 40
    assert client.object_type(head) is ObjectKind.COMMIT
    assert client.object_type(client.rev_parse("v1")) is ObjectKind.TAG
    assert client.object_type(client.rev_parse("light")) is ObjectKind.COMMIT


def test_unknown_revisions(repo: Path) -> None:
    client = GitClient(repo)
    missing = "f" * 40
    assert client.object_type(missing) is ObjectKind.UNKNOWN
    assert client.rev_parse("no-such-ref") == "no-such-ref"


def test_log_newest_first(repo: Path) -> None:
    client = GitClient(repo)
    entries = client.log("HEAD~1..HEAD")
    assert len(entries) == 1
    assert entries[0].committer == "Test User"
    assert entries[0].subject == 'second "quoted"'
    assert entries[0].body == "body line\\x"

    everything = client.log("HEAD", max_count=5)
    assert [e.subject for e in everything] == ['second "quoted"', "first"]
    assert len(client.log("HEAD", max_count=1)) == 1


def test_count_commits(repo: Path) -> None:
    client = GitClient(repo)
    assert client.count_commits("HEAD~1..HEAD") == 1
    assert client.count_commits("HEAD..HEAD") == 0


def test_log_bad_range_raises(repo: Path) -> None:
    with pytest.raises(GitError, match="git log failed"):
        GitClient(repo).log("nope..HEAD")


def test_config_get(repo: Path) -> None:
    run_git(["config", "hooks.rocketchat.channel", "general"], repo)
    client = GitClient(repo)
    assert client.get("hooks.rocketchat.channel") == "general"
    assert client.get("hooks.rocketchat.missing") is None


def test_parse_log_handles_empty_output() -> None:
    assert parse_log("") == []
