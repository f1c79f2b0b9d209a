"""Audit trail backed by the ``audit_log`` table."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from booksphere.application.sync.protocols.audit_trail import AuditAction
from booksphere.domain.common.value_objects.ids import UserId
from booksphere.models import AuditLog as AuditLogORM

logger = logging.getLogger(__name__)


class AuditLogRepository:
    """
    Writes audit rows from async code.

    Each record opens its own session from ``session_factory`` and runs in
    the threadpool, so callers on the event loop are never blocked by the
    database.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    async def record(
        self,
        user_id: UserId,
        action: AuditAction,
        entity_type: str,
        entity_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        await run_in_threadpool(self._insert, user_id, action, entity_type, entity_id, details)

    def _insert(
        self,
        user_id: UserId,
        action: AuditAction,
        entity_type: str,
        entity_id: int | None,
        details: dict[str, Any] | None,
    ) -> None:
        db = self.session_factory()
        try:
            db.add(
                AuditLogORM(
                    user_id=user_id.value,
                    action=str(action),
                    entity_type=entity_type,
                    entity_id=entity_id,
                    details=details,
                )
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        logger.debug(f"Audit {action} recorded for user {user_id.value}")
