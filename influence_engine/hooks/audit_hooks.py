"""Audit hooks -- logs analysis calls for the audit trail."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)


def log_analysis_call(
    kind: str,
    account_ids: list[str],
    recommended_scenario: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Record an analysis run in the audit log.

    Returns the audit entry dict for downstream persistence.
    """
    entry = {
        "kind": kind,
        "account_ids": list(account_ids),
        "account_count": len(account_ids),
        "recommended_scenario": recommended_scenario,
        "details": details or {},
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }
    logger.info("Analysis audit: %s → %d account(s)", kind, len(account_ids))
    return entry
