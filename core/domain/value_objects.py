"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, Optional, Tuple

from core.domain.exceptions import InvalidAccountIdError, InvalidPaymentAmountError

ACCOUNT_ID_PATTERN = re.compile(r"^[0-9]+$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class AccountId(ValueObject):
    """Numeric identifier of an external trading account."""

    value: str

    def __post_init__(self):
        """Validate account ID format."""
        if not isinstance(self.value, str) or not ACCOUNT_ID_PATTERN.match(self.value):
            raise InvalidAccountIdError(f"Invalid account ID: {self.value!r}")

    @classmethod
    def parse(cls, raw) -> "AccountId":
        """Build an AccountId from user input (ints and padded strings allowed)."""
        if isinstance(raw, bool):
            raise InvalidAccountIdError(f"Invalid account ID: {raw!r}")
        if isinstance(raw, int):
            raw = str(raw)
        if not isinstance(raw, str):
            raise InvalidAccountIdError(f"Invalid account ID: {raw!r}")
        return cls(raw.strip())

    def __str__(self) -> str:
        """Return account ID as string."""
        return self.value


def normalize_account_ids(raw_ids: Optional[Iterable]) -> Tuple[str, ...]:
    """
    Validate and normalize a list of account IDs.

    Duplicates are dropped, keeping the first occurrence order.

    Raises:
        InvalidAccountIdError: If the list is empty or an entry is not numeric
    """
    if raw_ids is None or isinstance(raw_ids, (str, bytes)):
        raise InvalidAccountIdError("Account IDs must be a list")
    normalized = []
    for raw in raw_ids:
        value = AccountId.parse(raw).value
        if value not in normalized:
            normalized.append(value)
    if not normalized:
        raise InvalidAccountIdError("At least one account ID is required")
    return tuple(normalized)


@dataclass(frozen=True)
class Money(ValueObject):
    """Amount and ISO currency code."""

    amount: Decimal
    currency: str

    def __post_init__(self):
        """Validate amount and currency."""
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except (InvalidOperation, ValueError) as exc:
                raise InvalidPaymentAmountError(f"Invalid amount: {self.amount!r}") from exc
        if not self.amount.is_finite() or self.amount <= 0:
            raise InvalidPaymentAmountError("Amount must be greater than zero")
        if not isinstance(self.currency, str) or not CURRENCY_PATTERN.match(self.currency):
            raise InvalidPaymentAmountError(f"Invalid currency: {self.currency!r}")

    def __str__(self) -> str:
        """Return money as '<amount> <currency>'."""
        return f"{self.amount} {self.currency}"


@dataclass(frozen=True)
class Actor(ValueObject):
    """The authenticated caller of an operation."""

    user_id: int
    is_admin: bool = False


class RequestStatus(Enum):
    """License request status value object."""

    PENDING = "pending"
    PENDING_PAYMENT = "pending_payment"
    PAYMENT_VERIFIED = "payment_verified"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_open(self) -> bool:
        """True while the request still awaits a decision."""
        return self in OPEN_REQUEST_STATUSES

    @property
    def is_terminal(self) -> bool:
        """True once approved or rejected."""
        return not self.is_open

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


OPEN_REQUEST_STATUSES = frozenset(
    {RequestStatus.PENDING, RequestStatus.PENDING_PAYMENT, RequestStatus.PAYMENT_VERIFIED}
)


class PaymentStatus(Enum):
    """Payment status value object."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class PaymentMethodType(Enum):
    """Kinds of manually verified payment methods."""

    BANK_TRANSFER = "bank_transfer"
    CRYPTO = "crypto"
    PAYPAL = "paypal"
    ZELLE = "zelle"
    BINANCE = "binance"
    BINANCE_PAY_QR = "binance_pay_qr"
    AIRTM = "airtm"
    SKRILL = "skrill"
    SINPE = "sinpe"
    OTHER = "other"

    def __str__(self) -> str:
        """Return method type as string."""
        return self.value
