from __future__ import annotations

from .git import VersionControlClient
from .logging import get_logger
from .model import (
    ChangeType,
    Classification,
    ObjectKind,
    RefKind,
    RefUpdate,
    is_zero_id,
)

logger = get_logger(__name__)

# (ref prefix, object kind) -> ref kind; first match wins.
REF_KIND_TABLE: tuple[tuple[str, ObjectKind, RefKind], ...] = (
    ("refs/tags/", ObjectKind.COMMIT, RefKind.TAG),
    ("refs/tags/", ObjectKind.TAG, RefKind.ANNOTATED_TAG),
    ("refs/heads/", ObjectKind.COMMIT, RefKind.BRANCH),
    ("refs/remotes/", ObjectKind.COMMIT, RefKind.TRACKING_BRANCH),
)


def change_type_for(old_id: str, new_id: str) -> ChangeType:
    if is_zero_id(old_id):
        return ChangeType.CREATE
    if is_zero_id(new_id):
        return ChangeType.DELETE
    return ChangeType.UPDATE


def ref_kind_for(ref_name: str, object_kind: ObjectKind) -> tuple[RefKind, str]:
    for prefix, kind, ref_kind in REF_KIND_TABLE:
        if object_kind is kind and ref_name.startswith(prefix):
            return ref_kind, ref_name.removeprefix(prefix)
    return RefKind.UNRECOGNIZED, ref_name


def classify(
    update: RefUpdate,
    vcs: VersionControlClient,
    *,
    announce_recipients: str | None = None,
) -> Classification:
    old_id = vcs.rev_parse(update.old_id)
    new_id = vcs.rev_parse(update.new_id)
    change_type = change_type_for(old_id, new_id)
    rev = old_id if change_type is ChangeType.DELETE else new_id
    object_kind = vcs.object_type(rev)
    ref_kind, short_ref = ref_kind_for(update.ref_name, object_kind)

    if ref_kind is RefKind.TRACKING_BRANCH:
        logger.warning(
            "ref.tracking_branch",
            ref=update.ref_name,
            detail="push-update of tracking branch, no notification generated",
        )
    elif ref_kind is RefKind.UNRECOGNIZED:
        logger.warning(
            "ref.unknown_update",
            ref=update.ref_name,
            object_type=object_kind.value,
            detail="unknown type of update, no notification generated",
        )

    recipients = None
    if ref_kind is RefKind.ANNOTATED_TAG and announce_recipients:
        recipients = announce_recipients

    return Classification(
        change_type=change_type,
        ref_kind=ref_kind,
        short_ref=short_ref,
        old_id=old_id,
        new_id=new_id,
        recipients=recipients,
    )
