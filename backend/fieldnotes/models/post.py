from fieldnotes.extensions import db
from .base import BaseModel
from .taxonomy import post_tags, post_categories


class Post(BaseModel):
    __tablename__ = "posts"

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(320), unique=True, nullable=False, index=True)
    excerpt = db.Column(db.Text, nullable=False, default="")
    content = db.Column(db.Text, nullable=False, default="")

    seo_title = db.Column(db.String(300), nullable=True)
    seo_description = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="DRAFT", index=True)
    revision = db.Column(db.Integer, nullable=False, default=1)
    read_time_min = db.Column(db.Integer, nullable=False, default=1)

    # Owned by the curation feature; never written from the editorial pipeline
    featured_order = db.Column(db.Integer, nullable=True)
    editorial_pick_order = db.Column(db.Integer, nullable=True)

    author = db.relationship("User")

    revisions = db.relationship(
        "PostRevision",
        back_populates="post",
        order_by="PostRevision.revision",
        cascade="all, delete-orphan",
    )
    admin_notes = db.relationship(
        "AdminNote",
        back_populates="post",
        order_by="AdminNote.created_at",
        cascade="all, delete-orphan",
    )
    media = db.relationship(
        "Media",
        back_populates="post",
        order_by="Media.sort_order",
        cascade="all, delete-orphan",
    )

    tags = db.relationship("Tag", secondary=post_tags, order_by="Tag.name")
    categories = db.relationship("Category", secondary=post_categories, order_by="Category.name")
