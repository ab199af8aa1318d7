"""Analysis entry points for a single account and for a batch of accounts.

Every setting is passed in explicitly; omitted ones fall back to the
shipped defaults. Nothing here reads from storage.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from influence_engine.engine.aggregator import BusinessAggregator
from influence_engine.engine.calculator import MetricCalculator
from influence_engine.engine.ranker import ScenarioRanker
from influence_engine.engine.result import AccountAnalysis, BatchAnalysisResult
from influence_engine.engine.simulator import ScenarioSimulator
from influence_engine.methodology.schema import (
    BloggerSettings,
    BusinessSettings,
    IIWeights,
    OptimalityWeights,
    ScenarioParameters,
    SIWeights,
)
from influence_engine.models.account import AccountRecord
from influence_engine.models.enums import OptimalityMode, ScenarioKind
from influence_engine.scenarios.plugins import (
    CustomScenarioDefinition,
    ScenarioPlugin,
    default_definitions,
    resolve_plugins,
)

logger = logging.getLogger(__name__)


def resolve_optimality_mode(
    plugins: Iterable[ScenarioPlugin],
    requested: Optional[OptimalityMode] = None,
) -> OptimalityMode:
    """Pick the optimality formula for a run.

    An explicit request wins. Otherwise runs that include an active custom
    scenario use the raw formula and built-in-only runs the normalized one.
    """
    if requested is not None:
        return OptimalityMode(requested)
    has_custom = any(p.active and p.kind is ScenarioKind.CUSTOM for p in plugins)
    return OptimalityMode.RAW if has_custom else OptimalityMode.NORMALIZED


def analyze_single_account(
    record: AccountRecord,
    ii_weights: Optional[IIWeights] = None,
    si_weights: Optional[SIWeights] = None,
    scenario_params: Optional[ScenarioParameters] = None,
    optimality_weights: Optional[OptimalityWeights] = None,
    scenarios: Optional[Sequence[CustomScenarioDefinition]] = None,
    optimality_mode: Optional[OptimalityMode] = None,
) -> AccountAnalysis:
    """Score one account and simulate, rank and recommend improvement scenarios."""
    ii_weights = ii_weights or IIWeights()
    si_weights = si_weights or SIWeights()
    scenario_params = scenario_params or ScenarioParameters()
    optimality_weights = optimality_weights or OptimalityWeights()
    definitions = list(scenarios) if scenarios is not None else default_definitions()

    calculator = MetricCalculator()
    metrics = calculator.calculate(record, ii_weights, si_weights)

    plugins = resolve_plugins(definitions, scenario_params)
    mode = resolve_optimality_mode(plugins, optimality_mode)
    logger.debug("Using %s optimality for account '%s'", mode.value, record.name)

    simulated = ScenarioSimulator(calculator).simulate(
        metrics, scenario_params, ii_weights, si_weights, plugins
    )
    ranked = ScenarioRanker().rank(simulated, optimality_weights, mode)

    return AccountAnalysis(record=record, metrics=metrics, scenarios=ranked)


def analyze_batch(
    records: Sequence[AccountRecord],
    ii_weights: Optional[IIWeights] = None,
    si_weights: Optional[SIWeights] = None,
) -> BatchAnalysisResult:
    """Score a batch of accounts relative to the batch averages and rank them."""
    return BusinessAggregator().aggregate(
        records,
        ii_weights or IIWeights(),
        si_weights or SIWeights(),
    )


def analyze_for_blogger(
    record: AccountRecord,
    settings: Optional[BloggerSettings] = None,
    scenarios: Optional[Sequence[CustomScenarioDefinition]] = None,
    optimality_weights: Optional[OptimalityWeights] = None,
    optimality_mode: Optional[OptimalityMode] = None,
) -> AccountAnalysis:
    """Single-account analysis driven by a BloggerSettings variant."""
    settings = settings or BloggerSettings()
    return analyze_single_account(
        record,
        ii_weights=settings.ii_weights,
        si_weights=settings.si_weights,
        scenario_params=settings.scenario_parameters,
        optimality_weights=optimality_weights,
        scenarios=scenarios,
        optimality_mode=optimality_mode,
    )


def analyze_for_business(
    records: Sequence[AccountRecord],
    settings: Optional[BusinessSettings] = None,
) -> BatchAnalysisResult:
    """Batch analysis driven by a BusinessSettings variant."""
    settings = settings or BusinessSettings()
    return analyze_batch(records, settings.ii_weights, settings.si_weights)
