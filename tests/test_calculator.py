"""Tests for the metric calculator on the reference account."""

import math
from dataclasses import replace

import pytest

from influence_engine.engine.calculator import MetricCalculator
from influence_engine.methodology.schema import IIWeights, SIWeights
from tests.conftest import make_account


@pytest.fixture
def calculator():
    return MetricCalculator()


class TestMetricCalculator:
    def test_base_metrics(self, calculator, reference_account, ii_weights, si_weights):
        metrics = calculator.calculate(reference_account, ii_weights, si_weights)
        assert metrics.followers_ratio == pytest.approx(20)
        assert metrics.growth_rate == pytest.approx(5)
        assert metrics.engagement_rate == pytest.approx(3.3)
        assert metrics.activity_stability == pytest.approx(0.733333, abs=1e-6)

    def test_passthrough_fields(self, calculator, reference_account, ii_weights, si_weights):
        metrics = calculator.calculate(reference_account, ii_weights, si_weights)
        assert metrics.post_frequency == 3
        assert metrics.avg_reach == 15000
        assert metrics.mentions == 15
        assert metrics.engagement_rate_std == 0.5
        assert metrics.reach_std == 0.3
        assert metrics.likes == 5000
        assert metrics.comments == 500

    def test_indices(self, calculator, reference_account, ii_weights, si_weights):
        metrics = calculator.calculate(reference_account, ii_weights, si_weights)
        assert metrics.influence_index == pytest.approx(4.3999)
        assert metrics.sustainability_index == pytest.approx(0.859388, abs=1e-6)

    def test_custom_weights_change_index(self, calculator, reference_account, si_weights):
        weights = IIWeights(followers_ratio=0, engagement_rate=0, post_frequency=0, reach=1, mentions=0)
        metrics = calculator.calculate(reference_account, weights, si_weights)
        assert metrics.influence_index == pytest.approx(1.5)

    def test_with_indices_recomputes_from_fields(self, calculator, reference_account, ii_weights, si_weights):
        metrics = calculator.calculate(reference_account, ii_weights, si_weights)
        changed = calculator.with_indices(
            replace(metrics, post_frequency=5), ii_weights, si_weights
        )
        assert changed.influence_index - metrics.influence_index == pytest.approx(0.04)
        assert changed.sustainability_index == pytest.approx(metrics.sustainability_index)

    def test_zero_subscribers_does_not_raise(self, calculator, ii_weights, si_weights):
        metrics = calculator.calculate(make_account(subscribers=0), ii_weights, si_weights)
        assert metrics.growth_rate == math.inf
        assert metrics.engagement_rate == 0.0
        assert math.isfinite(metrics.influence_index)

    def test_non_finite_metrics_are_logged(self, calculator, ii_weights, si_weights, caplog):
        with caplog.at_level("WARNING"):
            calculator.calculate(make_account(subscribers=0), ii_weights, si_weights)
        assert "growth_rate" in caplog.text

    def test_missing_std_uses_sentinel(self, calculator, ii_weights):
        record = make_account(engagement_rate_std=None, reach_std=None)
        weights = SIWeights(engagement_consistency=0.5, posting_consistency=0, reach_consistency=0.5)
        metrics = calculator.calculate(record, ii_weights, weights)
        assert metrics.sustainability_index == pytest.approx(0.5)

    def test_calculate_is_idempotent(self, calculator, reference_account, ii_weights, si_weights):
        first = calculator.calculate(reference_account, ii_weights, si_weights)
        second = calculator.calculate(reference_account, ii_weights, si_weights)
        assert first == second


POSITIVE_ACCOUNTS = [
    make_account(),
    make_account(subscribers=1, subscriptions=1, posts=1, post_frequency=0.5, likes=1, comments=1, shares=1, avg_reach=1, mentions=0),
    make_account(subscribers=2_000_000, subscriptions=10, followers_growth=-40_000, posts=300, post_frequency=14, avg_reach=900_000, mentions=250),
    make_account(subscriptions=0, post_frequency_std=10, engagement_rate_std=None, reach_std=None),
]


class TestMetricRanges:
    @pytest.mark.parametrize("record", POSITIVE_ACCOUNTS)
    def test_magnitude_metrics_are_non_negative(self, record, ii_weights, si_weights):
        metrics = MetricCalculator().calculate(record, ii_weights, si_weights)
        for name in ("followers_ratio", "engagement_rate", "post_frequency", "avg_reach", "mentions"):
            assert getattr(metrics, name) >= 0, name
        assert 0 <= metrics.activity_stability <= 1
