from fieldnotes.extensions import db
from .base import BaseModel

MEDIA_PHOTO = "PHOTO"
MEDIA_VIDEO = "VIDEO"


class Media(BaseModel):
    __tablename__ = "media"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False)
    type = db.Column(db.String(10), nullable=False, default=MEDIA_PHOTO)  # PHOTO | VIDEO
    file_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(100), nullable=False, default="application/octet-stream")
    data = db.Column(db.LargeBinary, nullable=False)
    alt_text = db.Column(db.String(500), nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    post = db.relationship("Post", back_populates="media")

    __table_args__ = (
        db.UniqueConstraint("post_id", "sort_order", name="uq_post_media_sort_order"),
        db.Index("idx_media_post_order", "post_id", "sort_order"),
    )
