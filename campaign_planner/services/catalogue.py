"""Read-only planner catalogue: channels, default CPMs and strategy presets.

The catalogue is built once per process and handed to the allocation engine.
Accessors always return fresh copies so callers can never mutate the stored
values.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from campaign_planner.services.exceptions import UnknownPresetError
from campaign_planner.settings import settings

CHANNEL_KEYS: tuple[str, ...] = ("video", "display", "social")

CUSTOM_STRATEGY = "custom"

# Order matters: comparisons list presets in exactly this order.
PRESET_STRATEGIES: tuple[str, ...] = ("balanced", "max_reach", "max_engagement")

STRATEGY_KEYS: tuple[str, ...] = PRESET_STRATEGIES + (CUSTOM_STRATEGY,)

# Absolute tolerance for a share mix summing to 1.0
MIX_TOLERANCE = 0.0001

DEFAULT_CPMS: Mapping[str, float] = MappingProxyType(
    {
        "video": 12.0,
        "display": 6.0,
        "social": 4.0,
    }
)

STRATEGY_PRESETS: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "balanced": MappingProxyType({"video": 0.30, "display": 0.30, "social": 0.40}),
        "max_reach": MappingProxyType({"video": 0.15, "display": 0.35, "social": 0.50}),
        "max_engagement": MappingProxyType({"video": 0.55, "display": 0.25, "social": 0.20}),
    }
)


@dataclass(frozen=True)
class PlannerCatalogue:
    channels: tuple[str, ...]
    default_cpms: Mapping[str, float]
    presets: Mapping[str, Mapping[str, float]]

    def get_channels(self) -> tuple[str, ...]:
        return self.channels

    def get_default_cpms(self) -> dict[str, float]:
        return {channel: self.default_cpms[channel] for channel in self.channels}

    def get_preset_names(self) -> tuple[str, ...]:
        return tuple(self.presets.keys())

    def get_preset(self, strategy: str) -> dict[str, float]:
        """Return a copy of the share mix for a built-in preset.

        ``custom`` is not a preset and is rejected like any unknown name.
        """
        preset = self.presets.get(strategy)
        if preset is None:
            raise UnknownPresetError(
                f"Unknown strategy preset '{strategy}'.",
                details={"strategy": strategy, "presets": list(self.presets.keys())},
            )
        return {channel: preset[channel] for channel in self.channels}

    def get_all_presets(self) -> dict[str, dict[str, float]]:
        return {name: self.get_preset(name) for name in self.presets}


def build_catalogue(default_cpms: Mapping[str, float] | None = None) -> PlannerCatalogue:
    """Build a catalogue, optionally replacing the built-in default CPMs."""
    cpms = dict(DEFAULT_CPMS)
    if default_cpms:
        cpms.update({k: float(v) for k, v in default_cpms.items() if k in CHANNEL_KEYS})
    return PlannerCatalogue(
        channels=CHANNEL_KEYS,
        default_cpms=MappingProxyType(cpms),
        presets=STRATEGY_PRESETS,
    )


@lru_cache(maxsize=1)
def load_catalogue() -> PlannerCatalogue:
    """Process-wide catalogue, with default CPMs taken from settings."""
    return build_catalogue(
        {
            "video": settings.DEFAULT_CPM_VIDEO,
            "display": settings.DEFAULT_CPM_DISPLAY,
            "social": settings.DEFAULT_CPM_SOCIAL,
        }
    )
