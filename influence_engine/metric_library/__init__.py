from . import formulas  # noqa: F401  (registers the base metrics)
from .registry import MetricDefinition, get_all_metrics, get_metric, register_metric

__all__ = ["MetricDefinition", "get_all_metrics", "get_metric", "register_metric"]
