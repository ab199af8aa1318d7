"""Base metric registry.

Formulas register themselves on import; the calculator resolves each base
metric by id and feeds it the record fields named in ``required_inputs``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

_METRICS: dict[str, MetricDefinition] = {}


@dataclass(frozen=True)
class MetricDefinition:
    """A base metric computed directly from an account record."""

    id: str
    symbol: str  # short label used in the index formulas (FR, GR, ...)
    label: str
    description: str
    required_inputs: list[str]  # AccountRecord field names, in formula argument order
    formula_fn: Callable[..., float]
    unit: str = "ratio"


def register_metric(
    metric_id: str,
    symbol: str,
    label: str,
    description: str,
    required_inputs: list[str],
    unit: str = "ratio",
) -> Callable:
    """Record the decorated formula under ``metric_id``; the function itself is unchanged."""

    def decorator(fn: Callable[..., float]) -> Callable[..., float]:
        _METRICS[metric_id] = MetricDefinition(
            id=metric_id,
            symbol=symbol,
            label=label,
            description=description,
            required_inputs=required_inputs,
            formula_fn=fn,
            unit=unit,
        )
        return fn

    return decorator


def get_metric(metric_id: str) -> Optional[MetricDefinition]:
    return _METRICS.get(metric_id)


def get_all_metrics() -> dict[str, MetricDefinition]:
    """Registered metrics keyed by id, in registration order."""
    return dict(_METRICS)
