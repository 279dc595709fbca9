"""
ExpireLicensesCommand.

Marks active licenses whose expiry date has passed as expired.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ExpireLicensesCommand:
    """Command for the expiration sweep."""

    dry_run: bool = False
    current_time: Optional[datetime] = None
