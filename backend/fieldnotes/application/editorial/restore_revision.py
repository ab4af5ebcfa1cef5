# fieldnotes/application/editorial/restore_revision.py
from typing import Any, Dict, Optional
from flask import current_app
from fieldnotes.extensions import db
from fieldnotes.models.post_revision import PostRevision
from fieldnotes.domain.document.text import estimate_read_time_minutes, extract_preview_text
from fieldnotes.domain.lifecycle.exceptions import RevisionNotFound
from fieldnotes.domain.lifecycle.post import PostStatus, resolve_submit_status
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.transaction import transactional
from fieldnotes.utils.versioning import SNAPSHOT_FIELDS, append_revision, next_revision
from .access import load_post_for_actor


def restore_revision(
    *,
    actor,
    revision_id: str,
    status_hint: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Bring back the content of an earlier snapshot.

    History is append-only: the old content becomes the post's current
    content and is recorded again as a brand new snapshot. The snapshot
    being restored is never touched.

    Status follows the explicit-save rule: authors go back to review,
    admins keep the current status unless they choose another.
    """
    # 1️⃣ Fetch the snapshot to restore
    source: PostRevision | None = db.session.get(PostRevision, revision_id)
    if source is None:
        raise RevisionNotFound(f"Revision {revision_id} not found")

    # 2️⃣ Fetch and authorize the owning post with a row-level lock
    post = load_post_for_actor(source.post_id, actor, lock=True)

    status = resolve_submit_status(
        is_admin=actor.is_admin,
        current=PostStatus(post.status),
        hint=status_hint,
    )

    with transactional():
        # 3️⃣ Re-apply the snapshot content
        for field in SNAPSHOT_FIELDS:
            setattr(post, field, getattr(source, field))
        if not post.excerpt:
            post.excerpt = extract_preview_text(post.content, current_app.config["EXCERPT_MAX_LENGTH"])
        post.read_time_min = estimate_read_time_minutes(
            post.content, current_app.config["READ_WORDS_PER_MINUTE"]
        )
        post.status = status.value

        # 4️⃣ Record it as a new snapshot
        restored = append_revision(post, next_revision(post))

        # 5️⃣ Audit logging
        log_action(
            action="post.restore",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={
                "from_revision": source.revision,
                "to_revision": restored.revision,
                "status": post.status,
            },
        )

    current_app.logger.info(
        "Post %s restored revision %s as %s", post.id, source.revision, restored.revision
    )

    return {
        "post_id": post.id,
        "status": post.status,
        "restored_from": source.revision,
        "revision": restored.revision,
    }
