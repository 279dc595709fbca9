"""
ValidateAccountQuery.

Query used by the MT5 Expert Advisor to check an account's license.
"""
from dataclasses import dataclass
from typing import Union


@dataclass
class ValidateAccountQuery:
    """Query to validate an account ID."""

    account_id: Union[str, int]
