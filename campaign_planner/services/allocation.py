"""Allocation engine: share resolution, CPM conversion and strategy comparison.

All operations are pure functions of their inputs plus the read-only
``PlannerCatalogue``.  Every plan, single or compared, is produced by
``AllocationEngine.build_plan`` so sanity warnings are always attached.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from numbers import Real
from typing import Any, Mapping, Sequence

from campaign_planner.services.catalogue import (
    CUSTOM_STRATEGY,
    MIX_TOLERANCE,
    PlannerCatalogue,
    load_catalogue,
)
from campaign_planner.services.exceptions import (
    IncompleteCustomMixError,
    InvalidShareSumError,
    MissingCustomMixError,
)
from campaign_planner.services.sanity_rules import get_sanity_warnings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Strategy identity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PresetStrategy:
    name: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class CustomStrategy:
    """A caller-defined mix; ``label`` is shown in comparisons."""

    mix: Mapping[str, Any]
    label: str | None = None

    @property
    def key(self) -> str:
        return CUSTOM_STRATEGY


Strategy = PresetStrategy | CustomStrategy


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChannelAllocation:
    channel_key: str
    share: float
    budget: float
    cpm: float
    impressions: int


@dataclass(frozen=True)
class PlanTotals:
    impressions_total: int


@dataclass(frozen=True)
class Plan:
    strategy: str
    allocations: tuple[ChannelAllocation, ...]
    totals: PlanTotals
    warnings: tuple[str, ...] = ()
    strategy_label: str | None = None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlanRequest:
    total_budget: float
    duration_days: int
    strategy: str
    custom_mix: Mapping[str, Any] | None = None
    cpm_overrides: Mapping[str, float | None] | None = None


@dataclass(frozen=True)
class CompareRequest:
    total_budget: float
    duration_days: int
    cpm_overrides: Mapping[str, float | None] | None = None
    custom_strategies: Sequence[CustomStrategy] = field(default_factory=tuple)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


class AllocationEngine:
    """Turns a strategy, CPM overrides and a total budget into plans."""

    def __init__(self, catalogue: PlannerCatalogue) -> None:
        self.catalogue = catalogue

    # ---- resolution -----------------------------------------------------------

    def resolve_shares(
        self,
        strategy: str | PresetStrategy | CustomStrategy,
        custom_mix: Mapping[str, Any] | None = None,
    ) -> dict[str, float]:
        """Return the share mix for *strategy*.

        Presets are authoritative: *custom_mix* is ignored for them.  A custom
        strategy must name every channel with a finite number, each share must
        lie in [0, 1] and the shares must sum to 1.0 within ``MIX_TOLERANCE``.
        """
        if isinstance(strategy, CustomStrategy):
            custom_mix = strategy.mix
            strategy = CUSTOM_STRATEGY
        elif isinstance(strategy, PresetStrategy):
            strategy = strategy.name

        if strategy != CUSTOM_STRATEGY:
            return self.catalogue.get_preset(strategy)

        if custom_mix is None:
            raise MissingCustomMixError("Custom mix is required when strategy is custom.")

        channels = self.catalogue.get_channels()
        missing = [c for c in channels if not _is_finite_number(custom_mix.get(c))]
        if missing:
            logger.warning("Rejected incomplete custom mix, bad channels: %s", missing)
            raise IncompleteCustomMixError(
                f"Custom mix must include {', '.join(channels)} shares.",
                details={"channels": missing},
            )

        shares = {c: float(custom_mix[c]) for c in channels}
        out_of_bounds = [c for c, share in shares.items() if not 0.0 <= share <= 1.0]
        total = sum(shares.values())
        if out_of_bounds or abs(total - 1.0) > MIX_TOLERANCE:
            logger.warning("Rejected custom mix %s (sum=%s)", shares, total)
            raise InvalidShareSumError(
                "Custom mix shares must each be between 0 and 1 and sum to 1.0.",
                details={"total": total, "out_of_bounds": out_of_bounds},
            )
        return shares

    def resolve_cpms(self, overrides: Mapping[str, float | None] | None = None) -> dict[str, float]:
        cpms = self.catalogue.get_default_cpms()
        if overrides:
            for channel in cpms:
                value = overrides.get(channel)
                if value is not None:
                    cpms[channel] = float(value)
        return cpms

    # ---- allocation -----------------------------------------------------------

    def allocate(
        self,
        shares: Mapping[str, float],
        cpms: Mapping[str, float],
        total_budget: float,
    ) -> list[ChannelAllocation]:
        allocations: list[ChannelAllocation] = []
        for channel in self.catalogue.get_channels():
            share = shares[channel]
            budget = total_budget * share
            cpm = cpms[channel]
            # Impressions are whole numbers, truncated toward zero
            impressions = math.floor(budget / cpm * 1000)
            allocations.append(
                ChannelAllocation(
                    channel_key=channel,
                    share=share,
                    budget=budget,
                    cpm=cpm,
                    impressions=impressions,
                )
            )
        return allocations

    def build_plan(
        self,
        strategy: str,
        shares: Mapping[str, float],
        cpms: Mapping[str, float],
        total_budget: float,
        label: str | None = None,
    ) -> Plan:
        allocations = self.allocate(shares, cpms, total_budget)
        impressions_total = sum(a.impressions for a in allocations)
        return Plan(
            strategy=strategy,
            strategy_label=label,
            allocations=tuple(allocations),
            totals=PlanTotals(impressions_total=impressions_total),
            warnings=tuple(get_sanity_warnings(strategy, shares)),
        )

    # ---- public operations ----------------------------------------------------

    def create_plan(self, request: PlanRequest) -> Plan:
        shares = self.resolve_shares(request.strategy, request.custom_mix)
        cpms = self.resolve_cpms(request.cpm_overrides)
        plan = self.build_plan(request.strategy, shares, cpms, request.total_budget)
        logger.debug(
            "Built %s plan: budget=%s impressions=%d warnings=%d",
            plan.strategy,
            request.total_budget,
            plan.totals.impressions_total,
            len(plan.warnings),
        )
        return plan

    def compare(self, request: CompareRequest) -> list[Plan]:
        """Presets first in catalogue order, then custom strategies as supplied."""
        cpms = self.resolve_cpms(request.cpm_overrides)
        plans = [
            self.build_plan(name, self.catalogue.get_preset(name), cpms, request.total_budget)
            for name in self.catalogue.get_preset_names()
        ]
        for custom in request.custom_strategies:
            shares = self.resolve_shares(CUSTOM_STRATEGY, custom.mix)
            plans.append(
                self.build_plan(
                    CUSTOM_STRATEGY, shares, cpms, request.total_budget, label=custom.label
                )
            )
        logger.debug("Compared %d strategies for budget=%s", len(plans), request.total_budget)
        return plans


@lru_cache(maxsize=1)
def get_allocation_engine() -> AllocationEngine:
    return AllocationEngine(load_catalogue())
