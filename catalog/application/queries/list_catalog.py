"""
Catalog listing queries.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Actor


@dataclass
class ListSubscriptionPlansQuery:
    """List plans; inactive ones only for admins."""

    actor: Optional[Actor] = None
    include_inactive: bool = False


@dataclass
class ListPaymentMethodsQuery:
    """List payment methods; inactive ones only for admins."""

    actor: Optional[Actor] = None
    include_inactive: bool = False
