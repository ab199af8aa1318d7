"""Import account records from JSON and convert them to plain dicts."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Union

from influence_engine.models.account import AccountRecord

_RECORD_FIELDS = {f.name for f in fields(AccountRecord)}
_TEXT_FIELDS = ("name", "platform", "category")
_OPTIONAL_STD_FIELDS = ("engagement_rate_std", "reach_std")


def record_to_dict(record: AccountRecord) -> dict[str, Any]:
    return asdict(record)


def record_from_dict(data: dict[str, Any]) -> AccountRecord:
    """Build an AccountRecord from a dict, ignoring unknown keys.

    Raises ValueError naming the first missing required field.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Account entry must be a JSON object, got {type(data).__name__}")

    for field_name in AccountRecord.REQUIRED_FIELDS:
        if field_name not in data and field_name not in _OPTIONAL_STD_FIELDS:
            raise ValueError(f"Missing required field: {field_name}")

    for field_name in _TEXT_FIELDS:
        if field_name in data and not isinstance(data[field_name], str):
            raise ValueError("Fields name, platform and category must be strings")

    kwargs = {k: v for k, v in data.items() if k in _RECORD_FIELDS}
    for field_name, value in kwargs.items():
        if field_name in _TEXT_FIELDS or field_name == "id":
            continue
        if value is None and field_name in _OPTIONAL_STD_FIELDS:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Field {field_name} must be a number, got {value!r}")

    if kwargs.get("id") is None:
        kwargs.pop("id", None)
    else:
        kwargs["id"] = str(kwargs["id"])
    return AccountRecord(**kwargs)


def load_accounts_json(source: Union[Path, str]) -> list[AccountRecord]:
    """Load one account object or a list of them.

    ``source`` is a file path (``Path``) or the JSON text itself (``str``).
    """
    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Account file not found: {source}")
        with open(source, "r") as f:
            raw = json.load(f)
    else:
        raw = json.loads(source)

    items = raw if isinstance(raw, list) else [raw]
    return [record_from_dict(item) for item in items]
