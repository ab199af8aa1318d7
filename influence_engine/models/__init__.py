from .account import AccountRecord, AccountValidationError, validate_account_record
from .enums import AnalysisMode, OptimalityMode, ScenarioKind

__all__ = [
    "AccountRecord",
    "AccountValidationError",
    "validate_account_record",
    "AnalysisMode",
    "OptimalityMode",
    "ScenarioKind",
]
