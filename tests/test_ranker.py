"""Tests for suitability, superiority and optimality rankings."""

import pytest

from influence_engine.engine.ranker import (
    ScenarioRanker,
    normalized_optimality_scores,
    raw_optimality_scores,
)
from influence_engine.engine.result import ScenarioDescriptor
from influence_engine.methodology.schema import OptimalityWeights
from influence_engine.models.enums import OptimalityMode, ScenarioKind


def make_scenario(key, delta_ii, delta_si, cost, active=True):
    return ScenarioDescriptor(
        key=key,
        name=key,
        kind=ScenarioKind.CUSTOM,
        delta_ii=delta_ii,
        delta_si=delta_si,
        cost=cost,
        description="",
        probability=60.0,
        active=active,
    )


@pytest.fixture
def reference_scenarios():
    """Deltas of the four built-ins on the reference account."""
    scenarios = [
        make_scenario("activity_scenario", 0.04, 0.044, 0.2),
        make_scenario("engagement_scenario", 0.04995, 0.020203, 0.2),
        make_scenario("collaboration_scenario", 0.09699, 0.005511, 0.4),
        make_scenario("education_scenario", 0.07797, 0.013987, 0.2),
    ]
    return {s.key: s for s in scenarios}


class TestRankings:
    def test_superiority_by_delta_ii(self, reference_scenarios):
        result = ScenarioRanker().rank(reference_scenarios, OptimalityWeights())
        assert result.superiority_ranking == [
            "collaboration_scenario",
            "education_scenario",
            "engagement_scenario",
            "activity_scenario",
        ]

    def test_suitability_by_cost_is_stable(self, reference_scenarios):
        result = ScenarioRanker().rank(reference_scenarios, OptimalityWeights())
        assert result.suitability_ranking == [
            "activity_scenario",
            "engagement_scenario",
            "education_scenario",
            "collaboration_scenario",
        ]

    def test_normalized_optimality(self, reference_scenarios):
        result = ScenarioRanker().rank(
            reference_scenarios, OptimalityWeights(), OptimalityMode.NORMALIZED
        )
        assert result.optimality_ranking == [
            "activity_scenario",
            "education_scenario",
            "collaboration_scenario",
            "engagement_scenario",
        ]
        assert result.recommended_scenario == "activity_scenario"
        assert result.optimality_scores["activity_scenario"] == pytest.approx(0.6062, abs=1e-4)

    def test_raw_optimality(self, reference_scenarios):
        result = ScenarioRanker().rank(reference_scenarios, OptimalityWeights(), OptimalityMode.RAW)
        assert result.optimality_ranking == [
            "education_scenario",
            "activity_scenario",
            "engagement_scenario",
            "collaboration_scenario",
        ]
        assert result.recommended_scenario == "education_scenario"
        assert result.optimality_mode is OptimalityMode.RAW

    def test_inactive_scenarios_excluded(self, reference_scenarios):
        reference_scenarios["collaboration_scenario"] = make_scenario(
            "collaboration_scenario", 0.0, 0.0, 0.4, active=False
        )
        result = ScenarioRanker().rank(reference_scenarios, OptimalityWeights())
        assert "collaboration_scenario" not in result.superiority_ranking
        assert "collaboration_scenario" not in result.optimality_ranking
        assert "collaboration_scenario" in result.scenarios

    def test_nothing_active(self):
        scenarios = {"a": make_scenario("a", 0.0, 0.0, 0.1, active=False)}
        result = ScenarioRanker().rank(scenarios, OptimalityWeights())
        assert result.optimality_ranking == []
        assert result.recommended_scenario == ""


class TestOptimalityScores:
    def test_non_positive_maxima_zero_their_terms(self):
        candidates = [make_scenario("a", -0.1, -0.2, 0.0)]
        scores = normalized_optimality_scores(candidates, OptimalityWeights())
        assert scores == {"a": 0.0}

    def test_raw_formula(self):
        candidates = [make_scenario("a", 0.1, 0.2, 0.5)]
        scores = raw_optimality_scores(candidates, OptimalityWeights())
        assert scores["a"] == pytest.approx(0.5 * 0.1 + 0.3 * 0.2 - 0.2 * 0.5)

    def test_empty_candidates(self):
        assert normalized_optimality_scores([], OptimalityWeights()) == {}
