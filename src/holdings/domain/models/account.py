"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Account:
    """
    Investment account owned by a single investor.

    Holdings are always kept per account; nothing merges positions across accounts.
    """

    account_id: str
    name: str
    owner_id: str
    account_type: str = "investment"
    created_at: Optional[datetime] = field(default=None)
