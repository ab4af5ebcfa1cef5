from sqlalchemy import select

from fieldnotes.extensions import db
from fieldnotes.models.post import Post
from fieldnotes.domain.lifecycle.exceptions import PostNotFound
from fieldnotes.domain.lifecycle.post import assert_can_access


def load_post(post_id, *, lock=False):
    query = select(Post).where(Post.id == post_id)
    if lock:
        query = query.with_for_update()

    post = db.session.execute(query).scalar_one_or_none()
    if post is None:
        raise PostNotFound(f"Post {post_id} not found")
    return post


def load_post_for_actor(post_id, actor, *, lock=False):
    """Fetch a post the actor owns (or any post, for admins)."""
    post = load_post(post_id, lock=lock)
    assert_can_access(post, actor)
    return post
