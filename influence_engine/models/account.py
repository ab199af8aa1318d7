from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional
from uuid import uuid4


class AccountValidationError(ValueError):
    """Raised at the input boundary when an account record cannot be analyzed."""

    def __init__(self, account_name: str, problems: list[str]):
        self.account_name = account_name
        self.problems = problems
        super().__init__(f"Account '{account_name}' is not analyzable: {'; '.join(problems)}")


@dataclass(frozen=True)
class AccountRecord:
    """Raw per-account counters for one social-media account over a period.

    Counters are totals for the period except ``post_frequency`` (posts per
    week) and ``avg_reach`` (per post). The three ``*_std`` fields are
    optional; ``None`` means the volatility is unknown.
    """

    name: str
    subscribers: float
    subscriptions: float
    followers_growth: float
    posts: float
    post_frequency: float
    likes: float
    comments: float
    shares: float
    avg_reach: float
    mentions: float
    engagement_rate_std: Optional[float] = None
    post_frequency_std: float = 0.0
    reach_std: Optional[float] = None
    platform: str = ""
    category: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))

    _IDENTITY_FIELDS = ("id", "name", "platform", "category")

    # Growth over the period may be negative
    SIGNED_FIELDS = ("followers_growth",)

    # Counters that must be strictly positive for the formulas to be meaningful
    POSITIVE_FIELDS = (
        "subscribers",
        "posts",
        "post_frequency",
        "likes",
        "comments",
        "shares",
        "avg_reach",
    )

    REQUIRED_FIELDS = (
        "name",
        "subscribers",
        "subscriptions",
        "followers_growth",
        "posts",
        "post_frequency",
        "likes",
        "comments",
        "shares",
        "avg_reach",
        "mentions",
        "engagement_rate_std",
        "post_frequency_std",
        "reach_std",
    )

    def get(self, field_name: str) -> Optional[float]:
        """Retrieve a counter by field name, returning None if missing."""
        return getattr(self, field_name, None)

    def counter_fields(self) -> list[str]:
        return [f.name for f in fields(self) if f.name not in self._IDENTITY_FIELDS]


def validate_account_record(record: AccountRecord) -> AccountRecord:
    """Reject records the calculator cannot score meaningfully.

    This is the caller-side boundary check: the calculator itself accepts
    anything and degrades to 0 / NaN instead.
    """
    problems: list[str] = []
    if not record.name:
        problems.append("name is required")

    for field_name in record.counter_fields():
        value = record.get(field_name)
        if field_name in AccountRecord.SIGNED_FIELDS:
            continue
        if value is not None and value < 0:
            problems.append(f"{field_name} cannot be negative")

    for field_name in AccountRecord.POSITIVE_FIELDS:
        value = record.get(field_name)
        if value is None or value <= 0:
            problems.append(f"{field_name} must be greater than 0")

    if problems:
        raise AccountValidationError(record.name or "<unnamed>", problems)
    return record
