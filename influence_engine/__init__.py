"""Influence and sustainability scoring for social-media accounts."""

from influence_engine.engine.analysis import (
    analyze_batch,
    analyze_single_account,
)
from influence_engine.engine.probability import get_scenario_probability

__all__ = ["analyze_batch", "analyze_single_account", "get_scenario_probability"]
