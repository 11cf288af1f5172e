from content_tree.extensions import db
from content_tree.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    tenant_id: Optional[str],
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    if not tenant_id:
        return  # Skip logging outside a tenant context
    log = AuditLog()

    log.tenant_id = tenant_id
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
