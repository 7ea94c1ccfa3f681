from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from .. import models
from . import metrics

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def enqueue_outbox(db: Session, topic: str, payload: dict[str, Any]) -> models.OutboxEvent:
    """Record a follow-up step for a write that is already committed.

    The event is committed on its own, so whatever happens while delivering
    it never touches the triggering row.
    """
    event = models.OutboxEvent(
        topic=topic,
        payload_json=_jsonable(payload),
        status=models.OutboxStatus.PENDING,
        attempt_count=0,
    )
    event.stamp_created()
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("outbox_enqueue topic=%s id=%s", topic, event.id)
    return event


def deliver(
    db: Session,
    event: models.OutboxEvent,
    handler: Callable[[Session, models.OutboxEvent], Any],
) -> Optional[Any]:
    """Run ``handler`` for ``event`` and record the outcome on the event row.

    Returns the handler's result, or ``None`` when it raised. Handler errors
    are logged and stored in ``last_error``; they are never re-raised.
    """
    event.attempt_count = (event.attempt_count or 0) + 1
    event.touch()
    db.commit()
    try:
        result = handler(db, event)
    except Exception as exc:
        # Drop whatever the handler left half-written, keep committed rows.
        db.rollback()
        logger.warning(
            "outbox_delivery_failed topic=%s id=%s attempt=%s err=%s",
            event.topic,
            event.id,
            event.attempt_count,
            exc,
            exc_info=True,
        )
        metrics.incr("outbox.failed", tags={"topic": event.topic})
        event.status = models.OutboxStatus.FAILED
        event.last_error = f"{type(exc).__name__}: {exc}"
        event.touch()
        db.commit()
        return None

    event.status = models.OutboxStatus.DELIVERED
    event.delivered_at = datetime.utcnow()
    event.last_error = None
    event.touch()
    db.commit()
    logger.info("outbox_delivered topic=%s id=%s", event.topic, event.id)
    metrics.incr("outbox.delivered", tags={"topic": event.topic})
    return result


def list_events(
    db: Session,
    status: Optional[models.OutboxStatus] = None,
    topic: Optional[str] = None,
    limit: int = 100,
) -> list[models.OutboxEvent]:
    query = db.query(models.OutboxEvent)
    if status is not None:
        query = query.filter(models.OutboxEvent.status == status)
    if topic:
        query = query.filter(models.OutboxEvent.topic == topic)
    return query.order_by(models.OutboxEvent.id.desc()).limit(limit).all()
