"""Sanity rules for resolved strategy mixes.

Each rule is a standalone pure function returning a ``SanityCheckResult``.
Rules never raise and never change an allocation; a failed check only adds
an advisory warning to the plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

VIDEO_SHARE_THRESHOLD = 0.35


@dataclass(frozen=True)
class SanityCheckResult:
    """Outcome of a single sanity rule."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# 1. Reach strategies cap video
# ---------------------------------------------------------------------------


def check_max_reach_video_cap(
    strategy: str,
    shares: Mapping[str, float],
    *,
    max_video_share: float = VIDEO_SHARE_THRESHOLD,
) -> SanityCheckResult:
    """``max_reach`` should keep video at or below *max_video_share*."""
    video = shares.get("video", 0.0)
    if strategy == "max_reach" and video > max_video_share:
        return SanityCheckResult(
            passed=False,
            rule_name="max_reach_video_cap",
            message=(
                f"Max reach strategy should keep video share at or below "
                f"{max_video_share} to prioritize reach."
            ),
            details={"video_share": video, "max_video_share": max_video_share},
        )
    return SanityCheckResult(
        passed=True,
        rule_name="max_reach_video_cap",
        message="Video share within reach cap",
    )


# ---------------------------------------------------------------------------
# 2. Engagement strategies keep video
# ---------------------------------------------------------------------------


def check_max_engagement_video_floor(
    strategy: str,
    shares: Mapping[str, float],
    *,
    min_video_share: float = VIDEO_SHARE_THRESHOLD,
) -> SanityCheckResult:
    """``max_engagement`` should keep video at or above *min_video_share*."""
    video = shares.get("video", 0.0)
    if strategy == "max_engagement" and video < min_video_share:
        return SanityCheckResult(
            passed=False,
            rule_name="max_engagement_video_floor",
            message=(
                f"Max engagement strategy should keep video share at or above "
                f"{min_video_share} to sustain engagement."
            ),
            details={"video_share": video, "min_video_share": min_video_share},
        )
    return SanityCheckResult(
        passed=True,
        rule_name="max_engagement_video_floor",
        message="Video share above engagement floor",
    )


SANITY_RULES: tuple[Callable[[str, Mapping[str, float]], SanityCheckResult], ...] = (
    check_max_reach_video_cap,
    check_max_engagement_video_floor,
)


def evaluate_sanity_rules(strategy: str, shares: Mapping[str, float]) -> list[SanityCheckResult]:
    """Run every rule in declaration order and return all results."""
    return [rule(strategy, shares) for rule in SANITY_RULES]


def get_sanity_warnings(strategy: str, shares: Mapping[str, float]) -> list[str]:
    return [result.message for result in evaluate_sanity_rules(strategy, shares) if not result.passed]
