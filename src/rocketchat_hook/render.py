from __future__ import annotations

import re

from .model import ChangeType, Classification, RefKind

COMMIT_PHRASE_RE = re.compile(r"[a-zA-Z0-9]+ new commits?")


def link(url: str, text: str) -> str:
    return f"<{url}|{text}>"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def base_header(
    classification: Classification, repo_name: str, commit_count: int = 0
) -> str:
    kind = classification.ref_kind.label
    ref = classification.short_ref
    match classification.change_type:
        case ChangeType.CREATE:
            return f"New {kind} {ref} has been created in {repo_name}"
        case ChangeType.DELETE:
            return f"{_capitalize(kind)} {ref} has been deleted from {repo_name}"
        case ChangeType.UPDATE:
            if commit_count > 1:
                return f"{commit_count} new commits pushed to {ref} in {repo_name}"
            return f"A new commit has been pushed to {ref} in {repo_name}"


def showing_last_word(change_type: ChangeType, commit_count: int) -> str:
    if change_type is ChangeType.UPDATE and commit_count > 1:
        return "one"
    return "commit"


def link_commit_phrase(header: str, url: str) -> str:
    """Wrap the first ``<n> new commit(s)`` phrase in a hyperlink."""
    return COMMIT_PHRASE_RE.sub(lambda m: link(url, m.group(0)), header, count=1)


def compose_header(
    classification: Classification,
    repo_name: str,
    *,
    commit_count: int = 0,
    only_last: bool = False,
    compare_url: str | None = None,
) -> str:
    header = base_header(classification, repo_name, commit_count)
    change_type = classification.change_type
    if only_last and change_type is not ChangeType.DELETE:
        header = f"{header}, showing last {showing_last_word(change_type, commit_count)}:"
    if (
        compare_url
        and change_type is not ChangeType.DELETE
        and classification.ref_kind is RefKind.BRANCH
    ):
        header = link_commit_phrase(header, compare_url)
    return header
