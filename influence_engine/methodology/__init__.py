from .loader import get_default_blogger_settings, get_default_business_settings, get_default_settings
from .schema import (
    BloggerSettings,
    BusinessSettings,
    IIWeights,
    OptimalityWeights,
    ScenarioParameters,
    SIWeights,
    parse_settings,
    settings_weight_errors,
)

__all__ = [
    "get_default_settings",
    "get_default_business_settings",
    "get_default_blogger_settings",
    "BloggerSettings",
    "BusinessSettings",
    "IIWeights",
    "OptimalityWeights",
    "ScenarioParameters",
    "SIWeights",
    "parse_settings",
    "settings_weight_errors",
]
