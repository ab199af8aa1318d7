"""Load and validate default scoring settings from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from influence_engine.methodology.schema import (
    BloggerSettings,
    BusinessSettings,
    parse_settings,
)
from influence_engine.models.enums import AnalysisMode

# Default directory for settings config files
_CONFIG_DIR = Path(__file__).parent / "configs"

_DEFAULT_FILES = {
    AnalysisMode.BUSINESS: "business_default.json",
    AnalysisMode.BLOGGER: "blogger_default.json",
}


def load_settings(file_path: Path) -> Union[BusinessSettings, BloggerSettings]:
    """Load and validate a settings file; the ``mode`` key selects the variant."""
    if not file_path.exists():
        raise FileNotFoundError(f"Settings config not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return parse_settings(raw)


def get_default_settings(
    mode: AnalysisMode,
) -> Union[BusinessSettings, BloggerSettings]:
    """Load the shipped default settings for an analysis mode."""
    return load_settings(_CONFIG_DIR / _DEFAULT_FILES[AnalysisMode(mode)])


def get_default_business_settings() -> BusinessSettings:
    return get_default_settings(AnalysisMode.BUSINESS)


def get_default_blogger_settings() -> BloggerSettings:
    return get_default_settings(AnalysisMode.BLOGGER)
