"""Heuristic success probability (percent) of each scenario for an account.

Probabilities are read from the account's pre-scenario metrics and are
independent of the simulated deltas.
"""

from __future__ import annotations

from typing import Callable, Optional

from influence_engine.engine.result import MetricSet

# Returned when no metrics are available
DEFAULT_PROBABILITIES: dict[str, float] = {
    "activity_scenario": 70.0,
    "engagement_scenario": 85.0,
    "collaboration_scenario": 50.0,
    "education_scenario": 65.0,
}
UNKNOWN_SCENARIO_PROBABILITY = 60.0


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def activity_probability(metrics: MetricSet) -> float:
    """Accounts that post rarely or irregularly have the most room to improve."""
    post_freq_factor = max(0.0, 1 - metrics.post_frequency / 10)
    stability_factor = max(0.0, 1 - metrics.activity_stability)
    return 70 * post_freq_factor + 30 * stability_factor


def engagement_probability(metrics: MetricSet) -> float:
    er_factor = max(0.0, 1 - metrics.engagement_rate / 15)
    return 60 + 40 * er_factor


def collaboration_probability(metrics: MetricSet) -> float:
    mentions_factor = min(1.0, metrics.mentions / 20)
    reach_factor = min(1.0, metrics.avg_reach / 10000)
    return 60 * mentions_factor + 40 * reach_factor


def education_probability(metrics: MetricSet) -> float:
    likes = metrics.likes or 0.0
    comments = metrics.comments or 0.0
    comment_ratio = max(0.0, 1 - (comments / max(1.0, likes)) / 0.2)
    growth_factor = min(1.0, metrics.growth_rate / 10)
    return 50 + 30 * comment_ratio + 20 * growth_factor


_ESTIMATORS: dict[str, Callable[[MetricSet], float]] = {
    "activity_scenario": activity_probability,
    "engagement_scenario": engagement_probability,
    "collaboration_scenario": collaboration_probability,
    "education_scenario": education_probability,
}


def get_scenario_probability(
    scenario_key: str,
    metrics: Optional[MetricSet] = None,
) -> float:
    """Probability in [0, 100] that a scenario pays off for an account.

    Without metrics, returns the fixed default for the key (60 for keys
    that are not built-in scenarios).
    """
    estimator = _ESTIMATORS.get(scenario_key)
    if metrics is None or estimator is None:
        return DEFAULT_PROBABILITIES.get(scenario_key, UNKNOWN_SCENARIO_PROBABILITY)
    return _clamp_percent(estimator(metrics))
