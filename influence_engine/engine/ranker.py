"""Scenario ranker -- suitability, superiority and optimality orderings.

All orderings are stable: scenarios with equal scores keep the order in
which they were simulated.
"""

from __future__ import annotations

import logging
from typing import Mapping

from influence_engine.engine.result import ScenarioDescriptor, ScenarioResultSet
from influence_engine.methodology.schema import OptimalityWeights
from influence_engine.models.enums import OptimalityMode

logger = logging.getLogger(__name__)


def normalized_optimality_scores(
    candidates: list[ScenarioDescriptor],
    weights: OptimalityWeights,
) -> dict[str, float]:
    """alpha*dII/max(dII) + beta*dSI/max(dSI) + gamma*(1 - cost/max(cost)).

    Maxima are taken over the candidates; a non-positive maximum zeroes its term.
    """
    if not candidates:
        return {}
    max_delta_ii = max(s.delta_ii for s in candidates)
    max_delta_si = max(s.delta_si for s in candidates)
    max_cost = max(s.cost for s in candidates)

    scores: dict[str, float] = {}
    for s in candidates:
        norm_delta_ii = s.delta_ii / max_delta_ii if max_delta_ii > 0 else 0.0
        norm_delta_si = s.delta_si / max_delta_si if max_delta_si > 0 else 0.0
        inverted_cost = 1 - s.cost / max_cost if max_cost > 0 else 0.0
        scores[s.key] = (
            weights.alpha * norm_delta_ii
            + weights.beta * norm_delta_si
            + weights.gamma * inverted_cost
        )
    return scores


def raw_optimality_scores(
    candidates: list[ScenarioDescriptor],
    weights: OptimalityWeights,
) -> dict[str, float]:
    """alpha*dII + beta*dSI - gamma*cost on unscaled values."""
    return {
        s.key: weights.alpha * s.delta_ii + weights.beta * s.delta_si - weights.gamma * s.cost
        for s in candidates
    }


_OPTIMALITY_SCORERS = {
    OptimalityMode.NORMALIZED: normalized_optimality_scores,
    OptimalityMode.RAW: raw_optimality_scores,
}


class ScenarioRanker:
    """Orders the active scenarios of one account and picks a recommendation."""

    def rank(
        self,
        scenarios: Mapping[str, ScenarioDescriptor],
        weights: OptimalityWeights,
        mode: OptimalityMode = OptimalityMode.NORMALIZED,
    ) -> ScenarioResultSet:
        candidates = [s for s in scenarios.values() if s.active]

        # Lowest cost first: the easiest scenario to attempt
        suitability = [s.key for s in sorted(candidates, key=lambda s: s.cost)]
        superiority = [
            s.key for s in sorted(candidates, key=lambda s: s.delta_ii, reverse=True)
        ]

        scores = _OPTIMALITY_SCORERS[OptimalityMode(mode)](candidates, weights)
        optimality = [
            s.key for s in sorted(candidates, key=lambda s: scores[s.key], reverse=True)
        ]
        recommended = optimality[0] if optimality else ""
        logger.debug(
            "Ranked %d scenarios (%s optimality), recommended '%s'",
            len(candidates),
            OptimalityMode(mode).value,
            recommended,
        )

        return ScenarioResultSet(
            scenarios=dict(scenarios),
            suitability_ranking=suitability,
            superiority_ranking=superiority,
            optimality_ranking=optimality,
            recommended_scenario=recommended,
            optimality_mode=OptimalityMode(mode),
            optimality_scores=scores,
        )
