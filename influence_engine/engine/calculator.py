"""Metric calculator.

Takes one account record + index weights -> produces a MetricSet.
"""

from __future__ import annotations

import logging
import math
from dataclasses import fields, replace

# Ensure all formulas are registered on import
import influence_engine.metric_library.formulas  # noqa: F401
from influence_engine.engine.result import MetricSet
from influence_engine.metric_library.formulas import (
    calc_influence_index,
    calc_sustainability_index,
)
from influence_engine.metric_library.registry import get_metric
from influence_engine.methodology.schema import IIWeights, SIWeights
from influence_engine.models.account import AccountRecord

logger = logging.getLogger(__name__)

# Metrics derived from the record through the registry, in computation order
BASE_METRICS = ("followers_ratio", "growth_rate", "engagement_rate", "activity_stability")

# Record fields copied onto the MetricSet unchanged
PASSTHROUGH_FIELDS = (
    "post_frequency",
    "avg_reach",
    "mentions",
    "engagement_rate_std",
    "post_frequency_std",
    "reach_std",
    "likes",
    "comments",
)


class MetricCalculator:
    """Stateless calculator for base metrics and the two composite indices."""

    def calculate(
        self,
        record: AccountRecord,
        ii_weights: IIWeights,
        si_weights: SIWeights,
    ) -> MetricSet:
        """Compute FR, GR, ER, SA, the passthrough fields, II and SI."""
        values: dict[str, float] = {}
        for metric_id in BASE_METRICS:
            values[metric_id] = self._calculate_base_metric(record, metric_id)
        for field_name in PASSTHROUGH_FIELDS:
            values[field_name] = record.get(field_name)

        metrics = self.with_indices(MetricSet(**values), ii_weights, si_weights)
        self._warn_non_finite(record, metrics)
        return metrics

    def influence_index(self, metrics: MetricSet, weights: IIWeights) -> float:
        return calc_influence_index(
            followers_ratio=metrics.followers_ratio,
            engagement_rate=metrics.engagement_rate,
            post_frequency=metrics.post_frequency,
            avg_reach=metrics.avg_reach,
            mentions=metrics.mentions,
            w_followers_ratio=weights.followers_ratio,
            w_engagement_rate=weights.engagement_rate,
            w_post_frequency=weights.post_frequency,
            w_reach=weights.reach,
            w_mentions=weights.mentions,
        )

    def sustainability_index(self, metrics: MetricSet, weights: SIWeights) -> float:
        return calc_sustainability_index(
            engagement_rate=metrics.engagement_rate,
            engagement_rate_std=metrics.engagement_rate_std,
            activity_stability=metrics.activity_stability,
            avg_reach=metrics.avg_reach,
            reach_std=metrics.reach_std,
            w_engagement_consistency=weights.engagement_consistency,
            w_posting_consistency=weights.posting_consistency,
            w_reach_consistency=weights.reach_consistency,
        )

    def with_indices(
        self,
        metrics: MetricSet,
        ii_weights: IIWeights,
        si_weights: SIWeights,
    ) -> MetricSet:
        """Return a copy of ``metrics`` with II and SI recomputed from its fields."""
        return replace(
            metrics,
            influence_index=self.influence_index(metrics, ii_weights),
            sustainability_index=self.sustainability_index(metrics, si_weights),
        )

    @staticmethod
    def _calculate_base_metric(record: AccountRecord, metric_id: str) -> float:
        definition = get_metric(metric_id)
        if definition is None:
            raise KeyError(f"Metric '{metric_id}' not found in registry")
        kwargs = {name: record.get(name) for name in definition.required_inputs}
        return definition.formula_fn(**kwargs)

    @staticmethod
    def _warn_non_finite(record: AccountRecord, metrics: MetricSet) -> None:
        bad = [
            f.name
            for f in fields(metrics)
            if isinstance(getattr(metrics, f.name), float)
            and not math.isfinite(getattr(metrics, f.name))
        ]
        if bad:
            logger.warning(
                "Non-finite metrics for account '%s': %s", record.name, ", ".join(bad)
            )
