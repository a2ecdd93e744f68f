"""Post-receive pipeline: one notification per pushed ref."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .classify import classify
from .commits import format_commits, range_start
from .config import NotificationConfig
from .dispatch import WebhookDispatcher
from .environment import Environment
from .git import GitError, VersionControlClient
from .links import build_repo_links
from .logging import get_logger
from .model import ChangeType, Classification, CommitSummary, RefKind, RefUpdate
from .payload import Payload, build_payload
from .render import compose_header

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def branch_allowed(short_ref: str, branch_regexp: str | None) -> bool:
    if not branch_regexp:
        return True
    try:
        matched = re.search(branch_regexp, short_ref) is not None
    except re.error as e:
        logger.error("ref.invalid_branch_regexp", pattern=branch_regexp, error=str(e))
        return False
    if not matched:
        logger.info(
            "ref.filtered",
            ref=short_ref,
            pattern=branch_regexp,
            detail="no notification because the branch does not match",
        )
    return matched


class PostReceiveHook:
    def __init__(
        self,
        vcs: VersionControlClient,
        config: NotificationConfig,
        env: Environment,
        dispatcher: WebhookDispatcher,
    ) -> None:
        self._vcs = vcs
        self._config = config
        self._env = env
        self._dispatcher = dispatcher

    def build(self, classification: Classification) -> Payload:
        """Header and commit attachments for a ref that passed the filters."""
        config = self._config
        change_type = classification.change_type
        commit_count = 0
        if change_type is ChangeType.UPDATE:
            commit_count = self._vcs.count_commits(
                f"{classification.old_id}..{classification.new_id}"
            )

        commits: list[CommitSummary] = []
        compare_url = None
        if (
            change_type is not ChangeType.DELETE
            and classification.ref_kind is RefKind.BRANCH
        ):
            links = build_repo_links(
                config,
                cwd=self._env.cwd,
                old_id=classification.old_id,
                new_id=classification.new_id,
            )
            if links is not None:
                compare_url = links.compare_url()
            commits = format_commits(
                self._vcs,
                range_start(classification),
                classification.new_id,
                only_last=config.show_only_last,
                full_commit=config.show_full_commit,
                links=links,
            )

        header = compose_header(
            classification,
            config.repo_name,
            commit_count=commit_count,
            only_last=config.show_only_last,
            compare_url=compare_url,
        )
        return build_payload(
            header, commits, config, recipients=classification.recipients
        )

    def notify(self, update: RefUpdate) -> int:
        classification = classify(
            update, self._vcs, announce_recipients=self._config.announce_recipients
        )
        if not classification.ref_kind.notifies:
            return EXIT_OK
        if not branch_allowed(classification.short_ref, self._config.branch_regexp):
            return EXIT_OK

        url = self._config.require_webhook_url()
        payload = self.build(classification)
        logger.info(
            "hook.notify",
            ref=update.ref_name,
            change=classification.change_type.value,
            kind=classification.ref_kind.label,
            commits=len(payload.attachments),
            pusher=self._config.user,
        )
        if self._dispatcher.send(url, payload):
            return EXIT_OK
        return EXIT_FAILURE

    def run(self, lines: Iterable[str]) -> int:
        """Process every input line in order.

        The result is the status of the last processed line, not an aggregate:
        an earlier failure is masked by a later success.
        """
        status = EXIT_OK
        for line in lines:
            if not line.strip():
                continue
            update = RefUpdate.parse(line)
            if update is None:
                logger.warning("hook.malformed_line", line=line.rstrip("\n"))
                status = EXIT_FAILURE
                continue
            try:
                status = self.notify(update)
            except GitError as e:
                logger.error("hook.git_error", ref=update.ref_name, error=str(e))
                status = EXIT_FAILURE
        return status
