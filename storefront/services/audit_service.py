from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from storefront.dependencies import RequestMeta
from storefront.models import AuditLog

logger = logging.getLogger(__name__)


def log_event(
    db: Session,
    *,
    action: str,
    business_id: int | None,
    order_id: int | None = None,
    request_meta: RequestMeta | None = None,
    metadata: dict | None = None,
) -> None:
    meta = request_meta or RequestMeta()
    db.add(
        AuditLog(
            action=action,
            business_id=business_id,
            order_id=order_id,
            ip=meta.ip,
            user_agent=meta.user_agent,
            referrer=meta.referrer,
            url=meta.url,
            meta=metadata or {},
        )
    )
    logger.info(
        '%s business=%s order=%s',
        action,
        business_id,
        order_id,
        extra={'audit_action': action, 'business_id': business_id, 'order_id': order_id},
    )


def report_exception(exc: BaseException, *, operation: str, context: dict | None = None) -> None:
    """Log a failure that is handled locally and must not reach the caller."""
    logger.error(
        '%s failed: %s',
        operation,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={'operation': operation, 'context': context or {}},
    )
