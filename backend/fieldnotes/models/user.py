from fieldnotes.extensions import db
from .base import BaseModel

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(BaseModel):
    """
    Read-only view of the identity collaborator's user row.
    Credentials and session issuance live outside this service.
    """
    __tablename__ = "users"

    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=True)

    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)
    is_active = db.Column(db.Boolean, default=True)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
