"""Replay of records captured offline by field devices.

Each item may carry a ``device_id``/``local_id`` pair. A pair that is already
stored is reported as a duplicate and not inserted again, so a client can
resend its whole queue after a dropped connection. A failing item does not
abort the rest of the batch.
"""
from typing import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import logger
from app.crud.projects import get_project
from app.schemas.production import SyncItemResult, SyncOut


def replay(
    db: Session,
    entity: str,
    items: Sequence,
    find_existing: Callable[[Session, str, str], object | None],
    create: Callable[[Session, object], object],
) -> SyncOut:
    results: list[SyncItemResult] = []
    for item in items:
        if item.device_id and item.local_id:
            existing = find_existing(db, item.device_id, item.local_id)
            if existing:
                results.append(SyncItemResult(local_id=item.local_id, success=True, duplicate=True, id=existing.id))
                continue
        if not get_project(db, item.project_id):
            results.append(SyncItemResult(local_id=item.local_id, success=False, error="Project not found"))
            continue
        try:
            row = create(db, item)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("sync_item_failed", entity=entity, local_id=item.local_id, device_id=item.device_id)
            results.append(SyncItemResult(local_id=item.local_id, success=False, error=exc.__class__.__name__))
            continue
        results.append(SyncItemResult(local_id=item.local_id, success=True, id=row.id))

    logger.info(
        "sync_finished",
        entity=entity,
        items=len(items),
        created=sum(1 for r in results if r.success and not r.duplicate),
        duplicates=sum(1 for r in results if r.duplicate),
        failed=sum(1 for r in results if not r.success),
    )
    return SyncOut(results=results)
