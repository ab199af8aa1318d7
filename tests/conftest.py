"""Shared test fixtures for the influence engine test suite."""

import pytest

from influence_engine.methodology.schema import (
    IIWeights,
    OptimalityWeights,
    ScenarioParameters,
    SIWeights,
)
from influence_engine.models.account import AccountRecord


def make_account(**overrides) -> AccountRecord:
    """Reference account with optional field overrides."""
    values = dict(
        id="acc-ref",
        name="Reference Creator",
        platform="instagram",
        category="lifestyle",
        subscribers=10000,
        subscriptions=500,
        followers_growth=500,
        posts=20,
        post_frequency=3,
        likes=5000,
        comments=500,
        shares=200,
        avg_reach=15000,
        mentions=15,
        engagement_rate_std=0.5,
        post_frequency_std=0.8,
        reach_std=0.3,
    )
    values.update(overrides)
    return AccountRecord(**values)


def account_payload(**overrides) -> dict:
    """Reference account as a JSON request body."""
    values = dict(
        id="acc-ref",
        name="Reference Creator",
        platform="instagram",
        category="lifestyle",
        subscribers=10000,
        subscriptions=500,
        followers_growth=500,
        posts=20,
        post_frequency=3,
        likes=5000,
        comments=500,
        shares=200,
        avg_reach=15000,
        mentions=15,
        engagement_rate_std=0.5,
        post_frequency_std=0.8,
        reach_std=0.3,
    )
    values.update(overrides)
    return values


@pytest.fixture
def reference_account() -> AccountRecord:
    """FR 20, GR 5%, ER 3.3%, SA 0.7333, II 4.3999, SI 0.859388 with default weights."""
    return make_account()


@pytest.fixture
def ii_weights() -> IIWeights:
    return IIWeights()


@pytest.fixture
def si_weights() -> SIWeights:
    return SIWeights()


@pytest.fixture
def scenario_params() -> ScenarioParameters:
    return ScenarioParameters()


@pytest.fixture
def optimality_weights() -> OptimalityWeights:
    return OptimalityWeights()
