# fieldnotes/application/editorial/review_post.py
from typing import Any, Dict, Optional
from flask import current_app
from fieldnotes.extensions import db
from fieldnotes.models.admin_note import AdminNote
from fieldnotes.domain.lifecycle.exceptions import AccessDenied
from fieldnotes.domain.lifecycle.post import NOTE_REQUIRED, assert_reviewable, clean_text, parse_decision
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.transaction import transactional
from .access import load_post


def review_post(
    *,
    actor,
    post_id: str,
    decision: str,
    note: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Apply an admin review decision.

    Responsibilities:
    - approve / needs-changes / reject
    - attach the admin's note tagged with the post's current revision
    - never snapshot the body

    needs-changes and reject without a note are ignored: nothing changes
    and ``applied`` is False in the result.
    """
    if not actor.is_admin:
        raise AccessDenied("Only admins may review posts")

    target = parse_decision(decision)
    note = clean_text(note, "note")

    post = load_post(post_id, lock=True)

    if target in NOTE_REQUIRED and not note:
        ignored = {"post_id": post.id, "status": post.status, "applied": False}
        # Release the row lock; nothing was written
        db.session.rollback()
        current_app.logger.info("Ignored %s on post %s: feedback note missing", target.value, ignored["post_id"])
        return ignored

    assert_reviewable(post)

    with transactional():
        previous = post.status
        post.status = target.value

        if note:
            feedback = AdminNote()
            feedback.post_id = post.id
            feedback.admin_id = actor.id
            feedback.text = note
            feedback.revision = post.revision
            db.session.add(feedback)

        log_action(
            action="post.review",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={
                "from": previous,
                "to": post.status,
                "revision": post.revision,
                "note": bool(note),
            },
        )

    return {"post_id": post.id, "slug": post.slug, "status": post.status, "applied": True}
