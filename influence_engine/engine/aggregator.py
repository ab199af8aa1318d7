"""Business aggregator -- scores a batch of accounts relative to each other."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from influence_engine.engine.calculator import MetricCalculator
from influence_engine.engine.result import (
    BatchAnalysisResult,
    BatchEntry,
    MetricSet,
    PopulationAverages,
)
from influence_engine.metric_library.formulas import normalize
from influence_engine.methodology.schema import IIWeights, SIWeights
from influence_engine.models.account import AccountRecord

logger = logging.getLogger(__name__)

# Fields rescaled against twice the population mean before re-scoring
RENORMALIZED_FIELDS = (
    "followers_ratio",
    "engagement_rate",
    "post_frequency",
    "avg_reach",
    "mentions",
)


def average(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


class BusinessAggregator:
    """Computes population averages, renormalizes each account and ranks by II and SI."""

    def __init__(self, calculator: Optional[MetricCalculator] = None):
        self._calculator = calculator or MetricCalculator()

    def aggregate(
        self,
        records: Sequence[AccountRecord],
        ii_weights: IIWeights,
        si_weights: SIWeights,
    ) -> BatchAnalysisResult:
        if not records:
            logger.info("Empty batch, returning empty rankings")
            return BatchAnalysisResult(
                per_account=[],
                averages=PopulationAverages(),
                ranking_by_ii=[],
                ranking_by_si=[],
            )

        logger.info("Aggregating %d accounts", len(records))
        raw = [self._calculator.calculate(r, ii_weights, si_weights) for r in records]
        averages = self.population_averages(raw)

        entries = [
            BatchEntry(
                record=record,
                metrics=self.renormalize(metrics, averages, ii_weights, si_weights),
                raw_metrics=metrics,
            )
            for record, metrics in zip(records, raw)
        ]

        ranking_by_ii = [
            e.record.id
            for e in sorted(entries, key=lambda e: e.metrics.influence_index, reverse=True)
        ]
        ranking_by_si = [
            e.record.id
            for e in sorted(entries, key=lambda e: e.metrics.sustainability_index, reverse=True)
        ]

        return BatchAnalysisResult(
            per_account=entries,
            averages=averages,
            ranking_by_ii=ranking_by_ii,
            ranking_by_si=ranking_by_si,
        )

    @staticmethod
    def population_averages(metrics: Sequence[MetricSet]) -> PopulationAverages:
        return PopulationAverages(
            followers_ratio=average([m.followers_ratio for m in metrics]),
            growth_rate=average([m.growth_rate for m in metrics]),
            engagement_rate=average([m.engagement_rate for m in metrics]),
            activity_stability=average([m.activity_stability for m in metrics]),
            post_frequency=average([m.post_frequency for m in metrics]),
            avg_reach=average([m.avg_reach for m in metrics]),
            mentions=average([m.mentions for m in metrics]),
            influence_index=average([m.influence_index for m in metrics]),
            sustainability_index=average([m.sustainability_index for m in metrics]),
        )

    def renormalize(
        self,
        metrics: MetricSet,
        averages: PopulationAverages,
        ii_weights: IIWeights,
        si_weights: SIWeights,
    ) -> MetricSet:
        """Rescale the five relative fields to [0, 1] against 2x the mean, then re-score."""
        rescaled = replace(
            metrics,
            **{
                name: normalize(getattr(metrics, name), 0, getattr(averages, name) * 2)
                for name in RENORMALIZED_FIELDS
            },
        )
        return self._calculator.with_indices(rescaled, ii_weights, si_weights)
