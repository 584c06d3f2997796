from __future__ import annotations

import pytest

from campaign_planner.services.catalogue import STRATEGY_PRESETS
from campaign_planner.services.sanity_rules import (
    check_max_engagement_video_floor,
    check_max_reach_video_cap,
    evaluate_sanity_rules,
    get_sanity_warnings,
)


def test_warns_when_max_reach_over_allocates_video():
    warnings = get_sanity_warnings("max_reach", {"video": 0.4, "display": 0.3, "social": 0.3})
    assert len(warnings) > 0
    assert "at or below 0.35" in warnings[0]


def test_warns_when_max_engagement_under_allocates_video():
    warnings = get_sanity_warnings(
        "max_engagement", {"video": 0.3, "display": 0.35, "social": 0.35}
    )
    assert len(warnings) > 0
    assert "at or above 0.35" in warnings[0]


def test_threshold_is_inclusive():
    mix = {"video": 0.35, "display": 0.3, "social": 0.35}
    assert get_sanity_warnings("max_reach", mix) == []
    assert get_sanity_warnings("max_engagement", mix) == []


@pytest.mark.parametrize("strategy", ["balanced", "custom"])
@pytest.mark.parametrize("video", [0.0, 0.3, 0.9])
def test_other_strategies_never_warn(strategy, video):
    rest = (1.0 - video) / 2
    assert get_sanity_warnings(strategy, {"video": video, "display": rest, "social": rest}) == []


@pytest.mark.parametrize("name", list(STRATEGY_PRESETS))
def test_presets_pass_their_own_rules(name):
    assert get_sanity_warnings(name, dict(STRATEGY_PRESETS[name])) == []


def test_evaluate_returns_every_rule_in_declaration_order():
    results = evaluate_sanity_rules("balanced", {"video": 0.3, "display": 0.3, "social": 0.4})
    assert [r.rule_name for r in results] == [
        "max_reach_video_cap",
        "max_engagement_video_floor",
    ]
    assert all(r.passed for r in results)


def test_failed_check_carries_details():
    result = check_max_reach_video_cap("max_reach", {"video": 0.5})
    assert result.passed is False
    assert result.details == {"video_share": 0.5, "max_video_share": 0.35}

    result = check_max_engagement_video_floor("max_engagement", {"video": 0.1}, min_video_share=0.2)
    assert result.passed is False
    assert result.details["min_video_share"] == 0.2
