from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .environment import Environment
from .git import ConfigStore

SECTION = "hooks.rocketchat"
DEFAULT_TIMEOUT_S = 10.0

# Display name sources, highest priority first; the derived repo name is last.
REPO_NAME_KEYS = (
    f"{SECTION}.repo-nice-name",
    "hooks.irc.prefix",
    "hooks.emailprefix",
)

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})

USAGE = """\
Required config settings:
  git config hooks.rocketchat.webhook-url 'https://www.mydomain.com/hooks/...'
  git config hooks.rocketchat.channel 'general'
Optional config settings:
  git config hooks.rocketchat.show-only-last-commit true
  git config hooks.rocketchat.show-full-commit true
  git config hooks.rocketchat.username 'git'
  git config hooks.rocketchat.icon-url 'http://imgur/icon.png'
  git config hooks.rocketchat.icon-emoji ':twisted_rightwards_arrows:'
  git config hooks.rocketchat.repo-nice-name 'MyRepo'
  git config hooks.rocketchat.repos-root '/path/to/repos'
  git config hooks.rocketchat.changeset-url-pattern 'http://yourserver/%repo_path%/changeset/%rev_hash%'
  git config hooks.rocketchat.compare-url-pattern 'http://yourserver/%repo_path%/changeset/%old_rev_hash%..%new_rev_hash%'
  git config hooks.rocketchat.branch-regexp 'regexp'
  git config hooks.rocketchat.announce-recipients '#releases'
  git config hooks.rocketchat.timeout 10"""


class ConfigError(RuntimeError):
    pass


class ConfigurationMissing(ConfigError):
    pass


@dataclass(frozen=True, slots=True)
class NotificationConfig:
    webhook_url: str | None = None
    channel: str | None = None
    username: str | None = None
    icon_url: str | None = None
    icon_emoji: str | None = None
    show_only_last: bool = False
    show_full_commit: bool = False
    repo_name: str = ""
    repos_root: Path | None = None
    changeset_url_pattern: str | None = None
    compare_url_pattern: str | None = None
    branch_regexp: str | None = None
    announce_recipients: str | None = None
    timeout: float = DEFAULT_TIMEOUT_S
    user: str | None = None

    def require_webhook_url(self) -> str:
        if not self.webhook_url:
            raise ConfigurationMissing(
                f"Missing webhook URL; set {SECTION}.webhook-url."
            )
        return self.webhook_url


def parse_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


def _get(store: ConfigStore, key: str) -> str | None:
    value = store.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _first_configured(store: ConfigStore, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = _get(store, key)
        if value is not None:
            return value
    return None


def _parse_timeout(value: str | None) -> float:
    if value is None:
        return DEFAULT_TIMEOUT_S
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(
            f"Invalid {SECTION}.timeout {value!r}; expected a number of seconds."
        ) from None
    if timeout <= 0:
        raise ConfigError(f"Invalid {SECTION}.timeout {value!r}; expected > 0.")
    return timeout


def resolve_config(store: ConfigStore, env: Environment) -> NotificationConfig:
    """Read every ``hooks.rocketchat.*`` option once.

    The webhook URL is not checked here; the dispatcher does that so that
    skipped refs never trip over a missing URL.
    """
    repos_root = _get(store, f"{SECTION}.repos-root")
    return NotificationConfig(
        webhook_url=_get(store, f"{SECTION}.webhook-url"),
        channel=_get(store, f"{SECTION}.channel"),
        username=_get(store, f"{SECTION}.username"),
        icon_url=_get(store, f"{SECTION}.icon-url"),
        icon_emoji=_get(store, f"{SECTION}.icon-emoji"),
        show_only_last=parse_bool(_get(store, f"{SECTION}.show-only-last-commit")),
        show_full_commit=parse_bool(_get(store, f"{SECTION}.show-full-commit")),
        repo_name=_first_configured(store, REPO_NAME_KEYS) or env.repo_name,
        repos_root=Path(repos_root).expanduser().resolve() if repos_root else None,
        changeset_url_pattern=_get(store, f"{SECTION}.changeset-url-pattern"),
        compare_url_pattern=_get(store, f"{SECTION}.compare-url-pattern"),
        branch_regexp=_get(store, f"{SECTION}.branch-regexp"),
        announce_recipients=_get(store, f"{SECTION}.announce-recipients"),
        timeout=_parse_timeout(_get(store, f"{SECTION}.timeout")),
        user=env.pusher,
    )
