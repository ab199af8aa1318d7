"""Immutable metric and analysis result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from influence_engine.models.account import AccountRecord
from influence_engine.models.enums import OptimalityMode, ScenarioKind


@dataclass(frozen=True)
class MetricSet:
    """Base metrics and composite indices for one account.

    ``influence_index`` and ``sustainability_index`` are always derived from
    the other fields; use ``MetricCalculator.with_indices`` after changing any
    of them.
    """

    followers_ratio: float  # FR
    growth_rate: float  # GR, percent
    engagement_rate: float  # ER, percent
    activity_stability: float  # SA
    post_frequency: float  # PA
    avg_reach: float  # RA
    mentions: float  # M
    engagement_rate_std: Optional[float]
    post_frequency_std: float
    reach_std: Optional[float]
    influence_index: float = 0.0  # II
    sustainability_index: float = 0.0  # SI
    likes: Optional[float] = None
    comments: Optional[float] = None


@dataclass(frozen=True)
class ScenarioDescriptor:
    """Projected effect of one improvement scenario on an account."""

    key: str
    name: str
    kind: ScenarioKind
    delta_ii: float
    delta_si: float
    cost: float
    description: str
    probability: float
    active: bool = True


@dataclass(frozen=True)
class ScenarioResultSet:
    """All scenarios simulated for one account plus their three rankings."""

    scenarios: dict[str, ScenarioDescriptor]
    suitability_ranking: list[str]
    superiority_ranking: list[str]
    optimality_ranking: list[str]
    recommended_scenario: str
    optimality_mode: OptimalityMode
    optimality_scores: dict[str, float] = field(default_factory=dict)

    def active_scenarios(self) -> list[ScenarioDescriptor]:
        return [s for s in self.scenarios.values() if s.active]


@dataclass(frozen=True)
class AccountAnalysis:
    """Result of analysing a single account."""

    record: AccountRecord
    metrics: MetricSet
    scenarios: ScenarioResultSet


@dataclass(frozen=True)
class PopulationAverages:
    """Arithmetic means across a batch of accounts, before renormalization."""

    followers_ratio: float = 0.0
    growth_rate: float = 0.0
    engagement_rate: float = 0.0
    activity_stability: float = 0.0
    post_frequency: float = 0.0
    avg_reach: float = 0.0
    mentions: float = 0.0
    influence_index: float = 0.0
    sustainability_index: float = 0.0


@dataclass(frozen=True)
class BatchEntry:
    """One account of a batch: renormalized metrics plus the raw ones."""

    record: AccountRecord
    metrics: MetricSet
    raw_metrics: MetricSet


@dataclass(frozen=True)
class BatchAnalysisResult:
    """Top-level result of comparing several accounts."""

    per_account: list[BatchEntry]
    averages: PopulationAverages
    ranking_by_ii: list[str]
    ranking_by_si: list[str]
