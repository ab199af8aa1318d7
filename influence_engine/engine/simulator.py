"""Scenario simulator.

Perturbs a MetricSet under each scenario's rule, recomputes II and SI on
the perturbed copy and reports the deltas against the original.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional

from influence_engine.engine.calculator import MetricCalculator
from influence_engine.engine.probability import get_scenario_probability
from influence_engine.engine.result import MetricSet, ScenarioDescriptor
from influence_engine.metric_library.formulas import normalize
from influence_engine.methodology.schema import IIWeights, ScenarioParameters, SIWeights
from influence_engine.models.enums import ScenarioKind
from influence_engine.scenarios.plugins import ScenarioPlugin

logger = logging.getLogger(__name__)

# Fixed ranges used by the custom rule to rescale metrics into [0, 1]
CUSTOM_NORMALIZATION_RANGES: dict[str, tuple[float, float]] = {
    "followers_ratio": (0.0, 10.0),
    "growth_rate": (0.0, 0.5),
    "engagement_rate": (0.0, 0.3),
    "post_frequency": (0.0, 14.0),
    "mentions": (0.0, 100.0),
}


def _param(params: ScenarioParameters, name: str) -> float:
    value = getattr(params, name, None)
    if value is None:
        logger.warning("Scenario parameter '%s' is missing, using 0", name)
        return 0.0
    return value


def _activity_rule(metrics: MetricSet, params: ScenarioParameters) -> MetricSet:
    return replace(
        metrics,
        post_frequency=metrics.post_frequency + _param(params, "post_frequency_delta"),
        activity_stability=min(1, metrics.activity_stability * 1.2),
    )


def _engagement_rule(metrics: MetricSet, params: ScenarioParameters) -> MetricSet:
    return replace(
        metrics,
        engagement_rate=metrics.engagement_rate * _param(params, "engagement_target"),
        avg_reach=metrics.avg_reach * 1.15,
    )


def _collaboration_rule(metrics: MetricSet, params: ScenarioParameters) -> MetricSet:
    return replace(
        metrics,
        mentions=metrics.mentions + _param(params, "mentions_delta"),
        avg_reach=metrics.avg_reach * 1.3,
        engagement_rate=metrics.engagement_rate * 1.1,
    )


def _education_rule(metrics: MetricSet, params: ScenarioParameters) -> MetricSet:
    return replace(
        metrics,
        engagement_rate=metrics.engagement_rate * 1.3,
        avg_reach=metrics.avg_reach * 1.25,
    )


def _custom_rule(metrics: MetricSet, params: ScenarioParameters) -> MetricSet:
    """Generic rule shared by every caller-defined scenario."""
    boosted = replace(metrics, engagement_rate=metrics.engagement_rate * 1.3)
    return replace(
        boosted,
        **{
            name: normalize(getattr(boosted, name), low, high)
            for name, (low, high) in CUSTOM_NORMALIZATION_RANGES.items()
        },
    )


PERTURBATION_RULES: dict[ScenarioKind, Callable[[MetricSet, ScenarioParameters], MetricSet]] = {
    ScenarioKind.ACTIVITY: _activity_rule,
    ScenarioKind.ENGAGEMENT: _engagement_rule,
    ScenarioKind.COLLABORATION: _collaboration_rule,
    ScenarioKind.EDUCATION: _education_rule,
    ScenarioKind.CUSTOM: _custom_rule,
}


class ScenarioSimulator:
    """Stateless simulator producing one ScenarioDescriptor per plugin."""

    def __init__(self, calculator: Optional[MetricCalculator] = None):
        self._calculator = calculator or MetricCalculator()

    def perturb(
        self,
        metrics: MetricSet,
        kind: ScenarioKind,
        params: ScenarioParameters,
        ii_weights: IIWeights,
        si_weights: SIWeights,
    ) -> MetricSet:
        """Apply a scenario rule to a copy of ``metrics`` and recompute its indices."""
        perturbed = PERTURBATION_RULES[kind](metrics, params)
        return self._calculator.with_indices(perturbed, ii_weights, si_weights)

    def simulate(
        self,
        metrics: MetricSet,
        params: ScenarioParameters,
        ii_weights: IIWeights,
        si_weights: SIWeights,
        plugins: Iterable[ScenarioPlugin],
    ) -> dict[str, ScenarioDescriptor]:
        """Simulate every plugin, in order. Inactive plugins get zero deltas and probability."""
        results: dict[str, ScenarioDescriptor] = {}
        for plugin in plugins:
            if not plugin.active:
                results[plugin.key] = self._inactive_descriptor(plugin)
                continue

            perturbed = self.perturb(metrics, plugin.kind, params, ii_weights, si_weights)
            results[plugin.key] = ScenarioDescriptor(
                key=plugin.key,
                name=plugin.name,
                kind=plugin.kind,
                delta_ii=perturbed.influence_index - metrics.influence_index,
                delta_si=perturbed.sustainability_index - metrics.sustainability_index,
                cost=plugin.cost,
                description=plugin.description,
                probability=get_scenario_probability(plugin.key, metrics),
            )
        return results

    @staticmethod
    def _inactive_descriptor(plugin: ScenarioPlugin) -> ScenarioDescriptor:
        return ScenarioDescriptor(
            key=plugin.key,
            name=plugin.name,
            kind=plugin.kind,
            delta_ii=0.0,
            delta_si=0.0,
            cost=plugin.cost,
            description=plugin.description,
            probability=0.0,
            active=False,
        )
