"""Scenario plugins: catalog entries resolved into simulator inputs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from influence_engine.methodology.schema import NonNegative, ScenarioParameters
from influence_engine.models.enums import ScenarioKind

logger = logging.getLogger(__name__)

# Catalog ids 1-4 are reserved for the built-in scenarios
MAX_RESERVED_ID = 4


@dataclass(frozen=True)
class BuiltinScenario:
    id: int
    key: str
    kind: ScenarioKind
    name: str
    description: str
    cost_field: str


BUILTIN_SCENARIOS: tuple[BuiltinScenario, ...] = (
    BuiltinScenario(
        id=1,
        key="activity_scenario",
        kind=ScenarioKind.ACTIVITY,
        name="Increase activity",
        description="Post more often and on a steadier schedule",
        cost_field="cost_activity",
    ),
    BuiltinScenario(
        id=2,
        key="engagement_scenario",
        kind=ScenarioKind.ENGAGEMENT,
        name="Boost engagement",
        description="Improve content quality to raise engagement",
        cost_field="cost_engagement",
    ),
    BuiltinScenario(
        id=3,
        key="collaboration_scenario",
        kind=ScenarioKind.COLLABORATION,
        name="Collaborations",
        description="Collaborate with other creators to reach new audiences",
        cost_field="cost_collaboration",
    ),
    BuiltinScenario(
        id=4,
        key="education_scenario",
        kind=ScenarioKind.EDUCATION,
        name="Educational content",
        description="Publish educational content that invites discussion",
        cost_field="cost_education",
    ),
)

_BUILTIN_BY_ID = {b.id: b for b in BUILTIN_SCENARIOS}


class CustomScenarioDefinition(BaseModel):
    """One entry of the active-scenario list supplied by the caller."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    is_active: bool = Field(default=True, alias="isActive")
    description: Optional[str] = None
    cost: Optional[NonNegative] = None


@dataclass(frozen=True)
class ScenarioPlugin:
    """A scenario ready for simulation: identity, rule kind, activity and cost."""

    id: int
    key: str
    name: str
    kind: ScenarioKind
    active: bool
    cost: float
    description: str = ""


def scenario_key(scenario_id: int) -> str:
    """Result-map key for a catalog id."""
    builtin = _BUILTIN_BY_ID.get(scenario_id)
    if builtin is not None:
        return builtin.key
    return f"custom_scenario_{scenario_id}"


def default_definitions() -> list[CustomScenarioDefinition]:
    """The four built-in scenarios, all active."""
    return [
        CustomScenarioDefinition(id=b.id, name=b.name, is_active=True, description=b.description)
        for b in BUILTIN_SCENARIOS
    ]


def _coalesce_cost(value: Optional[float], key: str) -> float:
    if value is None:
        logger.warning("No cost configured for scenario '%s', using 0", key)
        return 0.0
    return value


def resolve_plugins(
    definitions: Iterable[CustomScenarioDefinition],
    params: ScenarioParameters,
) -> list[ScenarioPlugin]:
    """Turn catalog entries into plugins, preserving catalog order.

    Reserved ids map to their built-in rule and cost parameter; every other
    id gets the CUSTOM rule and its cost from the definition or from
    ``params.custom_costs``.
    """
    plugins: list[ScenarioPlugin] = []
    for definition in definitions:
        builtin = _BUILTIN_BY_ID.get(definition.id)
        if builtin is not None:
            plugins.append(
                ScenarioPlugin(
                    id=builtin.id,
                    key=builtin.key,
                    name=builtin.name,
                    kind=builtin.kind,
                    active=definition.is_active,
                    cost=_coalesce_cost(getattr(params, builtin.cost_field), builtin.key),
                    description=builtin.description,
                )
            )
            continue

        key = scenario_key(definition.id)
        cost = definition.cost
        if cost is None:
            cost = params.custom_costs.get(key)
        plugins.append(
            ScenarioPlugin(
                id=definition.id,
                key=key,
                name=definition.name,
                kind=ScenarioKind.CUSTOM,
                active=definition.is_active,
                cost=_coalesce_cost(cost, key),
                description=definition.description or "",
            )
        )
    return plugins
