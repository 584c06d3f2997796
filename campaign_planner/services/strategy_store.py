"""Persistence of recently used custom strategies.

The allocation engine never touches this store; the API saves a strategy here
after its mix has been validated by ``AllocationEngine.resolve_shares``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from campaign_planner.models import SavedCustomStrategy


def save_custom_strategy(db: Session, name: str, mix: dict[str, float]) -> SavedCustomStrategy:
    """Insert or update a strategy by name and mark it as most recently used."""
    now = datetime.now(tz=timezone.utc)
    saved = db.execute(
        select(SavedCustomStrategy).where(SavedCustomStrategy.name == name)
    ).scalar_one_or_none()

    if saved is None:
        saved = SavedCustomStrategy(name=name, mix_json=dict(mix), last_used_at=now)
        db.add(saved)
    else:
        saved.mix_json = dict(mix)
        saved.last_used_at = now

    db.commit()
    db.refresh(saved)
    return saved


def list_recent_strategies(db: Session, limit: int) -> list[SavedCustomStrategy]:
    return list(
        db.execute(
            select(SavedCustomStrategy)
            .order_by(SavedCustomStrategy.last_used_at.desc(), SavedCustomStrategy.name)
            .limit(limit)
        )
        .scalars()
        .all()
    )


def delete_custom_strategy(db: Session, strategy_id: uuid.UUID) -> bool:
    saved = db.get(SavedCustomStrategy, strategy_id)
    if saved is None:
        return False
    db.delete(saved)
    db.commit()
    return True
