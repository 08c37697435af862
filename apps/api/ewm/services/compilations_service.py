from __future__ import annotations

from collections.abc import Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ewm.api.schemas.compilations import NewCompilationDto, UpdateCompilationRequest
from ewm.db import transaction
from ewm.models import Compilation, Event
from ewm.services.error_codes import ErrorCode
from ewm.services.exceptions import NotFoundError
from ewm.services.views import fetch_views
from ewm.stats_client import StatsClient

logger = structlog.get_logger(__name__)


def get_compilation(db: Session, compilation_id: int) -> Compilation:
    compilation = db.get(Compilation, compilation_id)
    if not compilation:
        raise NotFoundError(
            ErrorCode.COMPILATION_NOT_FOUND, f"compilation {compilation_id} not found"
        )
    return compilation


def _load_events(db: Session, event_ids: Sequence[int]) -> list[Event]:
    ids = list(dict.fromkeys(event_ids))
    if not ids:
        return []
    events = db.scalars(select(Event).where(Event.id.in_(ids))).all()
    missing = sorted(set(ids) - {e.id for e in events})
    if missing:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, f"events not found: {missing}")
    return sorted(events, key=lambda e: e.id)


def views_for_compilations(stats: StatsClient, compilations: Sequence[Compilation]) -> dict[int, int]:
    events = {e.id: e for c in compilations for e in c.events}
    return fetch_views(stats, list(events.values()))


def create_compilation(db: Session, payload: NewCompilationDto) -> Compilation:
    compilation = Compilation(
        title=payload.title,
        pinned=payload.pinned,
        events=_load_events(db, payload.events),
    )
    with transaction(db):
        db.add(compilation)
    logger.info("compilation_created", compilation_id=compilation.id, events=len(compilation.events))
    return compilation


def update_compilation(
    db: Session, compilation_id: int, patch: UpdateCompilationRequest
) -> Compilation:
    compilation = get_compilation(db, compilation_id)
    with transaction(db):
        if patch.title is not None and patch.title.strip():
            compilation.title = patch.title
        if patch.pinned is not None:
            compilation.pinned = patch.pinned
        if patch.events is not None:
            compilation.events = _load_events(db, patch.events)
    return compilation


def delete_compilation(db: Session, compilation_id: int) -> None:
    compilation = get_compilation(db, compilation_id)
    with transaction(db):
        db.delete(compilation)
    logger.info("compilation_deleted", compilation_id=compilation_id)


def list_compilations(
    db: Session, pinned: bool | None, offset: int, limit: int
) -> list[Compilation]:
    stmt = select(Compilation).order_by(Compilation.id).offset(offset).limit(limit)
    if pinned is not None:
        stmt = stmt.where(Compilation.pinned == pinned)
    return list(db.scalars(stmt).all())
