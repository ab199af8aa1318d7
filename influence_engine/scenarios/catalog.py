"""Scenario catalog -- the caller-managed list of available scenarios."""

from __future__ import annotations

import logging
from typing import Optional

from .plugins import (
    MAX_RESERVED_ID,
    CustomScenarioDefinition,
    default_definitions,
)

logger = logging.getLogger(__name__)


class ScenarioCatalog:
    """Ordered, editable list of scenario definitions.

    Reserved built-ins (ids 1-4) can be toggled but not renamed or deleted.
    """

    def __init__(self, definitions: Optional[list[CustomScenarioDefinition]] = None):
        self._definitions: list[CustomScenarioDefinition] = (
            list(definitions) if definitions else default_definitions()
        )

    def all(self) -> list[CustomScenarioDefinition]:
        return list(self._definitions)

    def active(self) -> list[CustomScenarioDefinition]:
        return [d for d in self._definitions if d.is_active]

    def get(self, scenario_id: int) -> CustomScenarioDefinition:
        for definition in self._definitions:
            if definition.id == scenario_id:
                return definition
        raise KeyError(f"Scenario {scenario_id} not found")

    def add(
        self,
        name: str,
        description: str = "",
        cost: Optional[float] = None,
    ) -> CustomScenarioDefinition:
        """Append a new active scenario with the next free id."""
        if not name:
            raise ValueError("Scenario name is required")
        next_id = max([0, *(d.id for d in self._definitions)]) + 1
        definition = CustomScenarioDefinition(
            id=next_id, name=name, is_active=True, description=description, cost=cost
        )
        self._definitions.append(definition)
        logger.info("Added scenario %d '%s'", next_id, name)
        return definition

    def toggle(self, scenario_id: int) -> CustomScenarioDefinition:
        current = self.get(scenario_id)
        updated = current.model_copy(update={"is_active": not current.is_active})
        self._replace(updated)
        return updated

    def rename(self, scenario_id: int, name: str) -> CustomScenarioDefinition:
        if scenario_id <= MAX_RESERVED_ID:
            raise ValueError(f"Scenario {scenario_id} is built in and cannot be renamed")
        updated = self.get(scenario_id).model_copy(update={"name": name})
        self._replace(updated)
        return updated

    def delete(self, scenario_id: int) -> None:
        if scenario_id <= MAX_RESERVED_ID:
            raise ValueError(f"Scenario {scenario_id} is built in and cannot be deleted")
        self.get(scenario_id)
        self._definitions = [d for d in self._definitions if d.id != scenario_id]
        logger.info("Deleted scenario %d", scenario_id)

    def _replace(self, updated: CustomScenarioDefinition) -> None:
        self._definitions = [
            updated if d.id == updated.id else d for d in self._definitions
        ]
