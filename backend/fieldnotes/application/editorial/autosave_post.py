from typing import Any, Dict
from flask import current_app
from fieldnotes.extensions import db
from fieldnotes.models.post import Post
from fieldnotes.domain.lifecycle.post import PostStatus
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.slugs import new_post_slug
from fieldnotes.utils.taxonomy import rebind_taxonomy
from fieldnotes.utils.transaction import transactional
from .access import load_post_for_actor
from .fields import UNTITLED, apply_post_fields, read_post_fields


def autosave_post(
    *,
    actor,
    data: Dict[str, Any],
) -> str:
    """
    Persist the editor's working copy without touching the lifecycle.

    Responsibilities:
    - create a DRAFT post on the first call and hand its id back
    - afterwards overwrite the mutable fields in place
    - rebind tags and categories
    - never change status or revision, never snapshot

    Concurrent autosaves and explicit saves are last-write-wins per field.
    """
    fields = read_post_fields(data, default_title=UNTITLED)
    post_id = str(data.get("postId") or "").strip()

    post = load_post_for_actor(post_id, actor, lock=True) if post_id else None

    with transactional():
        if post is None:
            post = Post()
            post.author_id = actor.id
            post.slug = new_post_slug(fields.title)
            post.status = PostStatus.DRAFT.value
            post.revision = 1
            db.session.add(post)

        apply_post_fields(post, fields)
        rebind_taxonomy(post, tags=fields.tags, categories=fields.categories)
        db.session.flush()

        log_action(
            action="post.autosave",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={"created": not post_id},
        )

    current_app.logger.debug("Autosaved post %s for user %s", post.id, actor.id)
    return post.id
