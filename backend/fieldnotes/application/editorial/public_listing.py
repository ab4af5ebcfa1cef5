from typing import Optional

from fieldnotes.extensions import db
from fieldnotes.models import Category, Post, Tag, User
from fieldnotes.domain.lifecycle.post import PUBLIC_STATUS

# Filter value the listing UI sends for "no filter"
ANY_NAME = "all"


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _name_filter(value: Optional[str]) -> str:
    value = (value or "").strip()
    return "" if value.lower() == ANY_NAME else value


def public_posts_query(
    *,
    q: Optional[str] = None,
    tag: Optional[str] = None,
    category: Optional[str] = None,
    author: Optional[str] = None,
):
    """
    Approved posts matching the public listing filters.

    ``q`` is a case-insensitive substring search over title, excerpt, body,
    author name, category and tag names. ``tag``, ``category`` and
    ``author`` match a name exactly, ignoring case; "All" disables them.
    """
    query = Post.query.filter(Post.status == PUBLIC_STATUS.value)

    term = (q or "").strip()
    if term:
        pattern = _like_pattern(term)
        query = query.filter(db.or_(
            Post.title.ilike(pattern, escape="\\"),
            Post.excerpt.ilike(pattern, escape="\\"),
            Post.content.ilike(pattern, escape="\\"),
            Post.author.has(User.name.ilike(pattern, escape="\\")),
            Post.categories.any(Category.name.ilike(pattern, escape="\\")),
            Post.tags.any(Tag.name.ilike(pattern, escape="\\")),
        ))

    tag = _name_filter(tag)
    if tag:
        query = query.filter(Post.tags.any(db.func.lower(Tag.name) == tag.lower()))

    category = _name_filter(category)
    if category:
        query = query.filter(Post.categories.any(db.func.lower(Category.name) == category.lower()))

    author = _name_filter(author)
    if author:
        query = query.filter(Post.author.has(db.func.lower(User.name) == author.lower()))

    return query
