import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from campaign_planner.db import get_db
from campaign_planner.models import SavedCustomStrategy
from campaign_planner.schemas import (
    CompareRequestIn,
    ConfigOut,
    CustomStrategyIn,
    PlanOut,
    PlanRequestIn,
    SavedStrategyOut,
)
from campaign_planner.services.allocation import AllocationEngine, get_allocation_engine
from campaign_planner.services.catalogue import CUSTOM_STRATEGY
from campaign_planner.services.exceptions import PlannerError
from campaign_planner.services.strategy_store import (
    delete_custom_strategy,
    list_recent_strategies,
    save_custom_strategy,
)
from campaign_planner.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["planner"])


def _saved_out(saved: SavedCustomStrategy) -> SavedStrategyOut:
    return SavedStrategyOut(
        id=saved.id,
        name=saved.name,
        mix=saved.mix_json,
        created_at=saved.created_at,
        last_used_at=saved.last_used_at,
    )


@router.get("/config", response_model=ConfigOut)
def get_config(engine: AllocationEngine = Depends(get_allocation_engine)):
    catalogue = engine.catalogue
    return ConfigOut(
        channels=list(catalogue.get_channels()),
        default_cpms=catalogue.get_default_cpms(),
        strategy_presets=catalogue.get_all_presets(),
    )


@router.post("/plan", response_model=PlanOut, response_model_exclude_none=True)
def create_plan(
    payload: PlanRequestIn,
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    try:
        plan = engine.create_plan(payload.to_request())
    except PlannerError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PlanOut.from_plan(plan, payload.total_budget, payload.duration_days)


@router.post("/compare", response_model=list[PlanOut], response_model_exclude_none=True)
def compare_strategies(
    payload: CompareRequestIn,
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    try:
        plans = engine.compare(payload.to_request())
    except PlannerError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [PlanOut.from_plan(p, payload.total_budget, payload.duration_days) for p in plans]


# ---------------------------------------------------------------------------
# Saved custom strategies
# ---------------------------------------------------------------------------


@router.get("/custom-strategies", response_model=list[SavedStrategyOut])
def list_custom_strategies(
    limit: int = Query(default=settings.SAVED_STRATEGY_LIST_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Saved custom strategies, most recently used first."""
    return [_saved_out(s) for s in list_recent_strategies(db, limit)]


@router.post("/custom-strategies", response_model=SavedStrategyOut)
def save_strategy(
    payload: CustomStrategyIn,
    db: Session = Depends(get_db),
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    try:
        shares = engine.resolve_shares(CUSTOM_STRATEGY, payload.mix.model_dump())
    except PlannerError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    saved = save_custom_strategy(db, payload.name, shares)
    logger.info("Saved custom strategy %r (%s)", saved.name, saved.id)
    return _saved_out(saved)


@router.delete("/custom-strategies/{strategy_id}", status_code=204)
def remove_strategy(strategy_id: uuid.UUID, db: Session = Depends(get_db)):
    if not delete_custom_strategy(db, strategy_id):
        raise HTTPException(status_code=404, detail="Custom strategy not found")
    logger.info("Deleted custom strategy %s", strategy_id)
    return Response(status_code=204)
