from .aggregator import BusinessAggregator
from .analysis import (
    analyze_batch,
    analyze_for_blogger,
    analyze_for_business,
    analyze_single_account,
    resolve_optimality_mode,
)
from .calculator import MetricCalculator
from .probability import get_scenario_probability
from .ranker import ScenarioRanker
from .simulator import ScenarioSimulator

__all__ = [
    "BusinessAggregator",
    "MetricCalculator",
    "ScenarioRanker",
    "ScenarioSimulator",
    "analyze_batch",
    "analyze_for_blogger",
    "analyze_for_business",
    "analyze_single_account",
    "get_scenario_probability",
    "resolve_optimality_mode",
]
