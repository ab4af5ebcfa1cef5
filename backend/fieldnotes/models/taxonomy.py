from fieldnotes.extensions import db
from .base import BaseModel

post_tags = db.Table(
    "post_tags",
    db.Column("post_id", db.String(36), db.ForeignKey("posts.id"), primary_key=True),
    db.Column("tag_id", db.String(36), db.ForeignKey("tags.id"), primary_key=True),
)

post_categories = db.Table(
    "post_categories",
    db.Column("post_id", db.String(36), db.ForeignKey("posts.id"), primary_key=True),
    db.Column("category_id", db.String(36), db.ForeignKey("categories.id"), primary_key=True),
)


class Tag(BaseModel):
    __tablename__ = "tags"

    name = db.Column(db.String(100), unique=True, nullable=False)


class Category(BaseModel):
    __tablename__ = "categories"

    name = db.Column(db.String(100), unique=True, nullable=False)
