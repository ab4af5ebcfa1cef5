from fieldnotes.extensions import db
from .base import BaseModel


class AdminNote(BaseModel):
    __tablename__ = "admin_notes"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    admin_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    text = db.Column(db.Text, nullable=False)

    # Revision of the post the note was written against
    revision = db.Column(db.Integer, nullable=False)

    post = db.relationship("Post", back_populates="admin_notes")
