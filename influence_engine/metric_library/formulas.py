"""Influence and sustainability formulas.

Each function is a pure calculation with no side effects and no input
validation. Guarded divisions return 0; unguarded ones follow IEEE
semantics (inf / nan) instead of raising.
"""

from __future__ import annotations

import math
from typing import Optional

from influence_engine.metric_library.registry import register_metric

# Fixed empirical scale normalizers for the influence index
ER_SCALE = 100.0
PA_SCALE = 10.0
REACH_SCALE = 10000.0
MENTIONS_SCALE = 50.0

# Stability assumed when a volatility measurement is missing
UNKNOWN_STABILITY = 0.5


def ieee_divide(numerator: float, denominator: float) -> float:
    """Float division that yields inf/nan on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _or_zero(value: Optional[float]) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return value


@register_metric(
    metric_id="followers_ratio",
    symbol="FR",
    label="Followers Ratio",
    description="Subscribers per subscription. Formula: subscribers / subscriptions.",
    required_inputs=["subscribers", "subscriptions"],
)
def calc_followers_ratio(subscribers: float, subscriptions: float) -> float:
    """FR = subscribers / subscriptions, 0 when the account follows nobody."""
    if subscriptions == 0:
        return 0.0
    return subscribers / subscriptions


@register_metric(
    metric_id="growth_rate",
    symbol="GR",
    label="Audience Growth Rate",
    description="Period follower growth in percent. Formula: (followers_growth / subscribers) * 100.",
    required_inputs=["subscribers", "followers_growth"],
    unit="percent",
)
def calc_growth_rate(subscribers: float, followers_growth: float) -> float:
    """GR = (growth / subscribers) * 100"""
    return ieee_divide(followers_growth, subscribers) * 100


@register_metric(
    metric_id="engagement_rate",
    symbol="ER",
    label="Engagement Rate",
    description=(
        "Weighted interactions per post per subscriber, in percent. Comments "
        "count twice and shares three times. "
        "Formula: ((likes + 2*comments + 3*shares) / (posts * subscribers)) * 100."
    ),
    required_inputs=["likes", "comments", "shares", "posts", "subscribers"],
    unit="percent",
)
def calc_engagement_rate(
    likes: float,
    comments: float,
    shares: float,
    posts: float,
    subscribers: float,
) -> float:
    """ER = ((likes + 2*comments + 3*shares) / (posts * subscribers)) * 100"""
    if posts == 0 or subscribers == 0:
        return 0.0
    return ((likes + comments * 2 + shares * 3) / (posts * subscribers)) * 100


@register_metric(
    metric_id="activity_stability",
    symbol="SA",
    label="Activity Stability",
    description=(
        "Posting regularity, 1 minus the coefficient of variation of the "
        "posting frequency. Formula: 1 - min(post_frequency_std / post_frequency, 1)."
    ),
    required_inputs=["post_frequency_std", "post_frequency"],
)
def calc_activity_stability(post_frequency_std: float, post_frequency: float) -> float:
    """SA = 1 - min(std / frequency, 1), 0 for an account that never posts."""
    if post_frequency == 0:
        return 0.0
    return 1 - min(post_frequency_std / post_frequency, 1)


def normalize(value: float, min_value: float, max_value: float) -> float:
    """Linear rescale of value into [0, 1]; 0.5 for a degenerate range."""
    if max_value == min_value:
        return 0.5
    return max(0.0, min(1.0, (value - min_value) / (max_value - min_value)))


def consistency(std: Optional[float], level: float) -> float:
    """1 - min(std / max(level, 1), 1), or the unknown sentinel without a std."""
    if std is None:
        return UNKNOWN_STABILITY
    return 1 - min(std / max(level, 1), 1)


def calc_influence_index(
    followers_ratio: float,
    engagement_rate: float,
    post_frequency: float,
    avg_reach: float,
    mentions: float,
    w_followers_ratio: float,
    w_engagement_rate: float,
    w_post_frequency: float,
    w_reach: float,
    w_mentions: float,
) -> float:
    """II = w1*FR + w2*ER/100 + w3*PA/10 + w4*RA/10000 + w5*M/50"""
    return (
        w_followers_ratio * _or_zero(followers_ratio)
        + w_engagement_rate * _or_zero(engagement_rate) / ER_SCALE
        + w_post_frequency * _or_zero(post_frequency) / PA_SCALE
        + w_reach * _or_zero(avg_reach) / REACH_SCALE
        + w_mentions * _or_zero(mentions) / MENTIONS_SCALE
    )


def calc_sustainability_index(
    engagement_rate: float,
    engagement_rate_std: Optional[float],
    activity_stability: float,
    avg_reach: float,
    reach_std: Optional[float],
    w_engagement_consistency: float,
    w_posting_consistency: float,
    w_reach_consistency: float,
) -> float:
    """SI = v1*engagement_stability + v2*SA + v3*reach_stability"""
    engagement_stability = consistency(engagement_rate_std, _or_zero(engagement_rate))
    reach_stability = consistency(reach_std, _or_zero(avg_reach))
    return (
        w_engagement_consistency * engagement_stability
        + w_posting_consistency * _or_zero(activity_stability)
        + w_reach_consistency * reach_stability
    )
