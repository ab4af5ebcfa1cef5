from sqlalchemy import event
from fieldnotes.extensions import db
from .base import BaseModel


class PostRevision(BaseModel):
    __tablename__ = "post_revisions"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False)
    revision = db.Column(db.Integer, nullable=False)

    title = db.Column(db.String(300), nullable=False)
    excerpt = db.Column(db.Text, nullable=False, default="")
    content = db.Column(db.Text, nullable=False, default="")
    seo_title = db.Column(db.String(300), nullable=True)
    seo_description = db.Column(db.Text, nullable=True)

    post = db.relationship("Post", back_populates="revisions")

    __table_args__ = (
        db.UniqueConstraint("post_id", "revision", name="uq_post_revision"),
        db.Index("idx_post_revision_post", "post_id"),
    )


@event.listens_for(PostRevision, "before_update")
@event.listens_for(PostRevision, "before_delete")
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Revision snapshots are immutable")
