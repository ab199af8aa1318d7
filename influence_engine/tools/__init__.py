"""JSON import/export helpers for account records and analysis results."""

from .account_io import load_accounts_json, record_from_dict, record_to_dict
from .export import (
    account_analysis_to_dict,
    batch_result_to_dict,
    metrics_to_dict,
    recommended_summary,
    scenario_results_to_dict,
)

__all__ = [
    "load_accounts_json",
    "record_from_dict",
    "record_to_dict",
    "account_analysis_to_dict",
    "batch_result_to_dict",
    "metrics_to_dict",
    "recommended_summary",
    "scenario_results_to_dict",
]
