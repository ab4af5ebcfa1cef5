from flask import g
from fieldnotes.extensions import db
from fieldnotes.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    """
    Stage an audit row in the current session. It commits or rolls back
    together with the mutation it describes.
    """
    if actor_id is None:
        current_user = g.get("current_user")
        actor_id = current_user.id if current_user is not None else None

    log = AuditLog()
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
