from .audit_hooks import log_analysis_call

__all__ = ["log_analysis_call"]
