import logging

from clubdir.platform.base import Platform

logger = logging.getLogger(__name__)


def audit(platform: Platform, actor_user_id, entity_type: str, entity_id: str, action: str, data: dict | None = None):
    logger.info("%s %s:%s by %s %s", action, entity_type, entity_id, actor_user_id or "-", data or {})
    platform.audit.record(
        str(actor_user_id) if actor_user_id else None,
        entity_type,
        str(entity_id),
        action,
        data or {},
    )
