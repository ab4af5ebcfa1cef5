import time
import uuid

from fieldnotes.models.post import Post
from fieldnotes.domain.document.text import slugify

FALLBACK_SLUG = "field-note"


def _taken(slug, exclude_id=None):
    query = Post.query.filter(Post.slug == slug)
    if exclude_id:
        query = query.filter(Post.id != exclude_id)
    return query.first() is not None


def new_post_slug(title):
    """``<slugified title>-<6 digit time suffix>``, unique across posts."""
    base = slugify(title) or FALLBACK_SLUG
    slug = f"{base}-{int(time.time() * 1000) % 1_000_000:06d}"
    while _taken(slug):
        slug = f"{base}-{uuid.uuid4().hex[:6]}"
    return slug


def draft_slug(post, title):
    """
    Drafts follow their title until they leave DRAFT. The suffix comes from
    the post id so the slug is stable across saves of the same title.
    """
    base = slugify(title) or FALLBACK_SLUG
    slug = f"{base}-{post.id[-6:]}"
    return post.slug if _taken(slug, exclude_id=post.id) else slug
