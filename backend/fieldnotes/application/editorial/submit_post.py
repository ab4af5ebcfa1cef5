# fieldnotes/application/editorial/submit_post.py
from typing import Any, Dict
from flask import current_app
from fieldnotes.extensions import db
from fieldnotes.models.post import Post
from fieldnotes.domain.invariants.post import assert_post_fields
from fieldnotes.domain.lifecycle.post import (
    PUBLIC_STATUS,
    PostStatus,
    assert_not_locked,
    resolve_submit_status,
)
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.slugs import draft_slug, new_post_slug
from fieldnotes.utils.taxonomy import rebind_taxonomy
from fieldnotes.utils.transaction import transactional
from fieldnotes.utils.versioning import append_revision, content_differs, next_revision
from .access import load_post_for_actor
from .fields import apply_post_fields, read_post_fields
from .reconcile_media import reconcile_media_order


def submit_post(
    *,
    actor,
    data: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Explicit save of a post from the editor, creating it when no ``postId``
    is given.

    Responsibilities:
    - validation before any write
    - edit lock for authors of pending posts
    - status resolution (authors -> PENDING, admins -> chosen/current)
    - revision snapshot when the post leaves or stays out of DRAFT with
      something new to record
    - tag/category rebind and media order reconciliation
    - one transaction for all of the above
    """
    fields = read_post_fields(data)
    assert_post_fields(title=fields.title, content=fields.content)

    post_id = str(data.get("postId") or "").strip()
    hint = data.get("status")

    if post_id:
        # 1️⃣ Existing post, row-locked for the rest of the transaction
        post = load_post_for_actor(post_id, actor, lock=True)
        assert_not_locked(post, actor)

        current = PostStatus(post.status)
        status = resolve_submit_status(is_admin=actor.is_admin, current=current, hint=hint)

        # Re-submitting identical content without a status change records nothing
        should_revise = status != PostStatus.DRAFT and (
            status != current or content_differs(post, fields.as_snapshot())
        )
    else:
        post = None
        status = resolve_submit_status(is_admin=actor.is_admin, current=None, hint=hint)

    with transactional():
        if post is None:
            # 2️⃣ New post: history always starts with revision 1
            post = Post()
            post.author_id = actor.id
            post.slug = new_post_slug(fields.title)
            post.status = status.value
            post.revision = 1
            apply_post_fields(post, fields)
            db.session.add(post)
            db.session.flush()

            append_revision(post, 1)
            created = True
            revised = True
        else:
            # 3️⃣ Drafts follow their title; published slugs are frozen
            if current == PostStatus.DRAFT:
                post.slug = draft_slug(post, fields.title)

            apply_post_fields(post, fields)
            post.status = status.value

            if should_revise:
                append_revision(post, next_revision(post))
            created = False
            revised = should_revise

        # 4️⃣ Rebind taxonomy and media order
        rebind_taxonomy(post, tags=fields.tags, categories=fields.categories)
        reordered = reconcile_media_order(
            post=post,
            content=fields.content,
            preview=data.get("mediaPreview"),
            actor_id=actor.id,
        )

        # 5️⃣ Audit logging
        log_action(
            action="post.create" if created else "post.submit",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={
                "status": post.status,
                "revision": post.revision,
                "revised": revised,
                "media_reordered": len(reordered),
            },
        )

    current_app.logger.info(
        "Post %s saved by %s: status=%s revision=%s", post.id, actor.id, post.status, post.revision
    )

    result: Dict[str, Any] = {
        "post_id": post.id,
        "slug": post.slug,
        "status": post.status,
        "revision": post.revision,
        "revised": revised,
    }
    if status == PUBLIC_STATUS:
        result["redirect"] = f"{current_app.config['ESSAY_URL_PREFIX']}/{post.slug}"
    return result
