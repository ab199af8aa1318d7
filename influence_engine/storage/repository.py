"""Settings repository -- typed load/save on top of a key-value store.

Corrupt or unreadable values are logged and treated as absent.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from influence_engine.methodology.loader import get_default_settings
from influence_engine.methodology.schema import BloggerSettings, BusinessSettings
from influence_engine.models.account import AccountRecord
from influence_engine.models.enums import AnalysisMode
from influence_engine.scenarios.catalog import ScenarioCatalog
from influence_engine.scenarios.plugins import CustomScenarioDefinition
from influence_engine.tools.account_io import record_from_dict, record_to_dict

from .base import KeyValueStore

logger = logging.getLogger(__name__)

BUSINESS_SETTINGS_KEY = "businessExpertSettings"
BLOGGER_SETTINGS_KEY = "bloggerExpertSettings"
BUSINESS_RESULTS_KEY = "businessResults"
BLOGGER_RESULTS_KEY = "bloggerResults"
BUSINESS_DATA_KEY = "businessData"
BLOGGER_DATA_KEY = "bloggerData"
CUSTOM_SCENARIOS_KEY = "customScenarios"

ALL_KEYS = (
    BUSINESS_SETTINGS_KEY,
    BLOGGER_SETTINGS_KEY,
    BUSINESS_RESULTS_KEY,
    BLOGGER_RESULTS_KEY,
    BUSINESS_DATA_KEY,
    BLOGGER_DATA_KEY,
    CUSTOM_SCENARIOS_KEY,
)

_SETTINGS_KEYS = {
    AnalysisMode.BUSINESS: BUSINESS_SETTINGS_KEY,
    AnalysisMode.BLOGGER: BLOGGER_SETTINGS_KEY,
}
_SETTINGS_MODELS = {
    AnalysisMode.BUSINESS: BusinessSettings,
    AnalysisMode.BLOGGER: BloggerSettings,
}

Settings = Union[BusinessSettings, BloggerSettings]


class SettingsRepository:
    """Persists settings, the scenario catalog, last inputs and last results."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    # -- raw JSON helpers ---------------------------------------------------

    def _load_json(self, key: str) -> Any:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Stored value for '%s' is not valid JSON: %s", key, e)
            return None

    def _save_json(self, key: str, value: Any) -> None:
        self._store.set(key, json.dumps(value, default=str))

    # -- settings -----------------------------------------------------------

    def load_settings(self, mode: AnalysisMode) -> Optional[Settings]:
        mode = AnalysisMode(mode)
        raw = self._load_json(_SETTINGS_KEYS[mode])
        if raw is None:
            return None
        try:
            return _SETTINGS_MODELS[mode].model_validate(raw)
        except ValidationError as e:
            logger.error("Stored %s settings are invalid: %s", mode.value, e)
            return None

    def save_settings(self, settings: Settings) -> None:
        self._save_json(_SETTINGS_KEYS[AnalysisMode(settings.mode)], settings.model_dump())

    def settings_or_default(self, mode: AnalysisMode) -> Settings:
        """Saved settings for ``mode``, or the shipped defaults."""
        return self.load_settings(mode) or get_default_settings(mode)

    def load_business_settings(self) -> Optional[BusinessSettings]:
        return self.load_settings(AnalysisMode.BUSINESS)

    def load_blogger_settings(self) -> Optional[BloggerSettings]:
        return self.load_settings(AnalysisMode.BLOGGER)

    # -- scenario catalog ---------------------------------------------------

    def load_scenario_catalog(self) -> ScenarioCatalog:
        """Saved catalog, or the four built-in scenarios when none is saved."""
        raw = self._load_json(CUSTOM_SCENARIOS_KEY)
        if not raw:
            return ScenarioCatalog()
        try:
            definitions = [CustomScenarioDefinition.model_validate(item) for item in raw]
        except (ValidationError, TypeError) as e:
            logger.error("Stored scenario catalog is invalid: %s", e)
            return ScenarioCatalog()
        return ScenarioCatalog(definitions)

    def save_scenario_catalog(self, catalog: ScenarioCatalog) -> None:
        self._save_json(
            CUSTOM_SCENARIOS_KEY,
            [d.model_dump(by_alias=True) for d in catalog.all()],
        )

    # -- last inputs --------------------------------------------------------

    def save_blogger_data(self, record: AccountRecord) -> None:
        self._save_json(BLOGGER_DATA_KEY, record_to_dict(record))

    def load_blogger_data(self) -> Optional[AccountRecord]:
        raw = self._load_json(BLOGGER_DATA_KEY)
        if raw is None:
            return None
        try:
            return record_from_dict(raw)
        except (TypeError, ValueError) as e:
            logger.error("Stored account data is invalid: %s", e)
            return None

    def save_business_data(self, records: list[AccountRecord]) -> None:
        self._save_json(BUSINESS_DATA_KEY, [record_to_dict(r) for r in records])

    def load_business_data(self) -> list[AccountRecord]:
        raw = self._load_json(BUSINESS_DATA_KEY)
        if not raw:
            return []
        try:
            return [record_from_dict(item) for item in raw]
        except (TypeError, ValueError) as e:
            logger.error("Stored batch data is invalid: %s", e)
            return []

    # -- last results -------------------------------------------------------

    def save_blogger_results(self, results: dict[str, Any]) -> None:
        self._save_json(BLOGGER_RESULTS_KEY, results)

    def load_blogger_results(self) -> Optional[dict[str, Any]]:
        return self._load_json(BLOGGER_RESULTS_KEY)

    def save_business_results(self, results: dict[str, Any]) -> None:
        self._save_json(BUSINESS_RESULTS_KEY, results)

    def load_business_results(self) -> Optional[dict[str, Any]]:
        return self._load_json(BUSINESS_RESULTS_KEY)

    def clear_all(self) -> None:
        for key in ALL_KEYS:
            self._store.delete(key)
