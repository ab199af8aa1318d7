"""Tests for scenario success probability heuristics."""

from dataclasses import replace

import pytest

from influence_engine.engine.calculator import MetricCalculator
from influence_engine.engine.probability import (
    DEFAULT_PROBABILITIES,
    get_scenario_probability,
)


@pytest.fixture
def metrics(reference_account, ii_weights, si_weights):
    return MetricCalculator().calculate(reference_account, ii_weights, si_weights)


class TestScenarioProbability:
    def test_activity(self, metrics):
        # 70 * (1 - 3/10) + 30 * (1 - 0.7333)
        assert get_scenario_probability("activity_scenario", metrics) == pytest.approx(57.0)

    def test_engagement(self, metrics):
        assert get_scenario_probability("engagement_scenario", metrics) == pytest.approx(91.2)

    def test_collaboration(self, metrics):
        assert get_scenario_probability("collaboration_scenario", metrics) == pytest.approx(85.0)

    def test_education(self, metrics):
        assert get_scenario_probability("education_scenario", metrics) == pytest.approx(75.0)

    def test_defaults_without_metrics(self):
        for key, expected in DEFAULT_PROBABILITIES.items():
            assert get_scenario_probability(key) == expected
        assert get_scenario_probability("engagement_scenario") == 85.0

    def test_unknown_key_returns_sixty(self, metrics):
        assert get_scenario_probability("custom_scenario_7") == 60.0
        assert get_scenario_probability("custom_scenario_7", metrics) == 60.0

    def test_result_is_clamped(self, metrics):
        shrinking = replace(metrics, growth_rate=-500)
        assert get_scenario_probability("education_scenario", shrinking) >= 0.0
        huge = replace(metrics, growth_rate=1e9)
        assert get_scenario_probability("education_scenario", huge) <= 100.0

    def test_missing_likes_comments_read_as_zero(self, metrics):
        bare = replace(metrics, likes=None, comments=None, growth_rate=0)
        # comment ratio term is fully earned: 50 + 30
        assert get_scenario_probability("education_scenario", bare) == pytest.approx(80.0)
