from typing import List, Type

from fieldnotes.extensions import db
from fieldnotes.models.taxonomy import Tag, Category
from fieldnotes.domain.document.text import split_names


def _upsert_by_name(model: Type[db.Model], names: List[str]) -> list:
    """
    Fetch rows by case-insensitive name, creating the ones never seen before.
    """
    rows = []
    for name in names:
        row = model.query.filter(db.func.lower(model.name) == name.lower()).first()
        if row is None:
            row = model()
            row.name = name
            db.session.add(row)
        rows.append(row)
    return rows


def rebind_taxonomy(post, *, tags: str | None, categories: str | None) -> None:
    """Replace the post's tag and category sets with the submitted lists."""
    post.tags = _upsert_by_name(Tag, split_names(tags))
    post.categories = _upsert_by_name(Category, split_names(categories))
