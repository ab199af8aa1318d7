"""Convert analysis results into JSON-ready dicts.

Field names follow the shapes the web client reads (``metrics.scenarios``,
``ranking``, ``sustainability_ranking``). Non-finite floats become None.
"""

from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any, Optional

from influence_engine.engine.result import (
    AccountAnalysis,
    BatchAnalysisResult,
    MetricSet,
    PopulationAverages,
    ScenarioDescriptor,
    ScenarioResultSet,
)
from influence_engine.tools.account_io import record_to_dict


def _finite_or_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _clean(values: dict[str, Any]) -> dict[str, Any]:
    return {k: _finite_or_none(v) for k, v in values.items()}


def metrics_to_dict(metrics: MetricSet) -> dict[str, Any]:
    return _clean(asdict(metrics))


def averages_to_dict(averages: PopulationAverages) -> dict[str, Any]:
    return _clean(asdict(averages))


def scenario_to_dict(scenario: ScenarioDescriptor) -> dict[str, Any]:
    return _clean({
        "name": scenario.name,
        "kind": scenario.kind.value,
        "delta_ii": scenario.delta_ii,
        "delta_si": scenario.delta_si,
        "cost": scenario.cost,
        "description": scenario.description,
        "probability": scenario.probability,
        "active": scenario.active,
    })


def scenario_results_to_dict(results: ScenarioResultSet) -> dict[str, Any]:
    payload: dict[str, Any] = {
        key: scenario_to_dict(scenario) for key, scenario in results.scenarios.items()
    }
    payload.update({
        "suitability_ranking": list(results.suitability_ranking),
        "superiority_ranking": list(results.superiority_ranking),
        "optimality_ranking": list(results.optimality_ranking),
        "recommended_scenario": results.recommended_scenario,
        "optimality_mode": results.optimality_mode.value,
        "optimality_scores": _clean(dict(results.optimality_scores)),
    })
    return payload


def account_analysis_to_dict(analysis: AccountAnalysis) -> dict[str, Any]:
    metrics = metrics_to_dict(analysis.metrics)
    metrics["scenarios"] = scenario_results_to_dict(analysis.scenarios)
    return {
        "blogger": record_to_dict(analysis.record),
        "metrics": metrics,
    }


def batch_result_to_dict(result: BatchAnalysisResult) -> dict[str, Any]:
    return {
        "bloggers": [
            {
                "blogger": record_to_dict(entry.record),
                "metrics": metrics_to_dict(entry.metrics),
                "raw_metrics": metrics_to_dict(entry.raw_metrics),
            }
            for entry in result.per_account
        ],
        "averages": averages_to_dict(result.averages),
        "ranking": list(result.ranking_by_ii),
        "sustainability_ranking": list(result.ranking_by_si),
    }


def recommended_summary(analysis: AccountAnalysis) -> Optional[dict[str, Any]]:
    """Short description of the recommended scenario, or None when nothing is active."""
    key = analysis.scenarios.recommended_scenario
    if not key:
        return None
    return {"key": key, **scenario_to_dict(analysis.scenarios.scenarios[key])}
