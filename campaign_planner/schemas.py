"""Pydantic schemas for the planner API.

Wire format is camelCase; Python attributes stay snake_case.  Request models
reject unknown fields and carry every single-field bound, so the engine only
has to re-check the share-sum invariant.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from campaign_planner.services.allocation import (
    CompareRequest,
    CustomStrategy,
    Plan,
    PlanRequest,
)
from campaign_planner.settings import settings

StrategyKey = Literal["balanced", "max_reach", "max_engagement", "custom"]


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        allow_inf_nan=False,
        str_strip_whitespace=True,
    )


class _ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CpmOverridesIn(_RequestModel):
    video: float | None = Field(default=None, ge=0.01)
    display: float | None = Field(default=None, ge=0.01)
    social: float | None = Field(default=None, ge=0.01)


class ShareMixIn(_RequestModel):
    video: float = Field(ge=0, le=1)
    display: float = Field(ge=0, le=1)
    social: float = Field(ge=0, le=1)


class CustomStrategyIn(_RequestModel):
    name: str = Field(min_length=1, max_length=settings.CUSTOM_STRATEGY_NAME_MAX_LENGTH)
    mix: ShareMixIn

    def to_strategy(self) -> CustomStrategy:
        return CustomStrategy(mix=self.mix.model_dump(), label=self.name)


class PlanRequestIn(_RequestModel):
    total_budget: float = Field(ge=0.01)
    duration_days: int = Field(ge=1)
    strategy: StrategyKey
    cpm_overrides: CpmOverridesIn | None = None
    custom_mix: ShareMixIn | None = None

    @model_validator(mode="after")
    def _require_custom_mix(self) -> "PlanRequestIn":
        if self.strategy == "custom" and self.custom_mix is None:
            raise ValueError("customMix is required when strategy is custom")
        return self

    def to_request(self) -> PlanRequest:
        return PlanRequest(
            total_budget=self.total_budget,
            duration_days=self.duration_days,
            strategy=self.strategy,
            custom_mix=self.custom_mix.model_dump() if self.custom_mix else None,
            cpm_overrides=self.cpm_overrides.model_dump() if self.cpm_overrides else None,
        )


class CompareRequestIn(_RequestModel):
    total_budget: float = Field(ge=0.01)
    duration_days: int = Field(ge=1)
    cpm_overrides: CpmOverridesIn | None = None
    custom_strategies: list[CustomStrategyIn] | None = Field(
        default=None, max_length=settings.MAX_CUSTOM_STRATEGIES
    )

    def to_request(self) -> CompareRequest:
        return CompareRequest(
            total_budget=self.total_budget,
            duration_days=self.duration_days,
            cpm_overrides=self.cpm_overrides.model_dump() if self.cpm_overrides else None,
            custom_strategies=tuple(s.to_strategy() for s in self.custom_strategies or []),
        )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ConfigOut(_ResponseModel):
    channels: list[str]
    default_cpms: dict[str, float]
    strategy_presets: dict[str, dict[str, float]]


class ChannelAllocationOut(_ResponseModel):
    channel_key: str
    share: float
    budget: float
    cpm: float
    impressions: int


class PlanTotalsOut(_ResponseModel):
    impressions_total: int


class PlanOut(_ResponseModel):
    strategy: StrategyKey
    strategy_label: str | None = None
    total_budget: float
    duration_days: int
    allocations: list[ChannelAllocationOut]
    totals: PlanTotalsOut
    warnings: list[str] = []

    @classmethod
    def from_plan(cls, plan: Plan, total_budget: float, duration_days: int) -> "PlanOut":
        return cls(
            strategy=plan.strategy,
            strategy_label=plan.strategy_label,
            total_budget=total_budget,
            duration_days=duration_days,
            allocations=[
                ChannelAllocationOut(
                    channel_key=a.channel_key,
                    share=a.share,
                    budget=a.budget,
                    cpm=a.cpm,
                    impressions=a.impressions,
                )
                for a in plan.allocations
            ],
            totals=PlanTotalsOut(impressions_total=plan.totals.impressions_total),
            warnings=list(plan.warnings),
        )


class SavedStrategyOut(_ResponseModel):
    id: uuid.UUID
    name: str
    mix: dict[str, float]
    created_at: datetime | None = None
    last_used_at: datetime
