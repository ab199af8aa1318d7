from .catalog import ScenarioCatalog
from .plugins import (
    BUILTIN_SCENARIOS,
    CustomScenarioDefinition,
    ScenarioPlugin,
    default_definitions,
    resolve_plugins,
    scenario_key,
)

__all__ = [
    "ScenarioCatalog",
    "BUILTIN_SCENARIOS",
    "CustomScenarioDefinition",
    "ScenarioPlugin",
    "default_definitions",
    "resolve_plugins",
    "scenario_key",
]
