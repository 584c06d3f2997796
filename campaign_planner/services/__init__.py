from campaign_planner.services.allocation import (
    AllocationEngine,
    ChannelAllocation,
    CompareRequest,
    CustomStrategy,
    Plan,
    PlanRequest,
    PresetStrategy,
    get_allocation_engine,
)
from campaign_planner.services.catalogue import PlannerCatalogue, build_catalogue, load_catalogue
from campaign_planner.services.exceptions import (
    IncompleteCustomMixError,
    InvalidShareSumError,
    MissingCustomMixError,
    PlannerError,
    UnknownPresetError,
)

__all__ = [
    "AllocationEngine",
    "ChannelAllocation",
    "CompareRequest",
    "CustomStrategy",
    "IncompleteCustomMixError",
    "InvalidShareSumError",
    "MissingCustomMixError",
    "Plan",
    "PlanRequest",
    "PlannerCatalogue",
    "PlannerError",
    "PresetStrategy",
    "UnknownPresetError",
    "build_catalogue",
    "get_allocation_engine",
    "load_catalogue",
]
