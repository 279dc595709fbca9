"""
PaymentMethod domain entity and its typed details.

Each payment method kind carries its own details shape; "other" keeps a
free-form string map as the explicit catch-all.
"""
import uuid
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Dict, Optional, Union

from core.domain.exceptions import InvalidPaymentMethodDetailsError, ValidationError
from core.domain.value_objects import PaymentMethodType, utcnow


@dataclass(frozen=True)
class BankTransferDetails:
    """Bank account to transfer to."""

    bank_name: str
    account_holder: str
    account_number: str
    routing_number: Optional[str] = None
    iban: Optional[str] = None
    swift: Optional[str] = None


@dataclass(frozen=True)
class CryptoWalletDetails:
    """Wallet address on a given network."""

    asset: str
    network: str
    address: str


@dataclass(frozen=True)
class QrCodeDetails:
    """Scan-to-pay QR asset."""

    qr_image: str
    pay_id: Optional[str] = None


@dataclass(frozen=True)
class AccountHandleDetails:
    """E-mail, phone or user handle on a payment service."""

    handle: str
    account_holder: Optional[str] = None


@dataclass(frozen=True)
class FreeformDetails:
    """Arbitrary labelled values for methods without a fixed shape."""

    fields: Dict[str, str] = field(default_factory=dict)


PaymentMethodDetails = Union[
    BankTransferDetails,
    CryptoWalletDetails,
    QrCodeDetails,
    AccountHandleDetails,
    FreeformDetails,
]

DETAILS_BY_TYPE = {
    PaymentMethodType.BANK_TRANSFER: BankTransferDetails,
    PaymentMethodType.SINPE: BankTransferDetails,
    PaymentMethodType.CRYPTO: CryptoWalletDetails,
    PaymentMethodType.BINANCE: CryptoWalletDetails,
    PaymentMethodType.BINANCE_PAY_QR: QrCodeDetails,
    PaymentMethodType.PAYPAL: AccountHandleDetails,
    PaymentMethodType.ZELLE: AccountHandleDetails,
    PaymentMethodType.AIRTM: AccountHandleDetails,
    PaymentMethodType.SKRILL: AccountHandleDetails,
    PaymentMethodType.OTHER: FreeformDetails,
}


def parse_method_type(value) -> PaymentMethodType:
    """Map a string to PaymentMethodType."""
    if isinstance(value, PaymentMethodType):
        return value
    try:
        return PaymentMethodType(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid payment method type: {value}") from exc


def parse_details(method_type: PaymentMethodType, raw: Optional[Dict[str, Any]]) -> PaymentMethodDetails:
    """
    Build the details variant for a method type from a plain dict.

    Raises:
        InvalidPaymentMethodDetailsError: On unknown keys, missing required
            keys or non-string values
    """
    raw = dict(raw or {})
    details_cls = DETAILS_BY_TYPE[method_type]

    if details_cls is FreeformDetails:
        values = raw.get("fields", raw)
        if not isinstance(values, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in values.items()
        ):
            raise InvalidPaymentMethodDetailsError("Free-form details must map strings to strings")
        return FreeformDetails(fields=dict(values))

    known = {f.name: f for f in fields(details_cls)}
    unknown = sorted(set(raw) - set(known))
    if unknown:
        raise InvalidPaymentMethodDetailsError(
            f"Unexpected fields for {method_type.value}: {', '.join(unknown)}"
        )
    for name, value in raw.items():
        if value is not None and not isinstance(value, str):
            raise InvalidPaymentMethodDetailsError(f"Field {name} must be a string")
    required = [
        name for name, f in known.items() if f.default is not None and not (raw.get(name) or "").strip()
    ]
    if required:
        raise InvalidPaymentMethodDetailsError(
            f"Missing fields for {method_type.value}: {', '.join(required)}"
        )
    return details_cls(**{k: (v.strip() if isinstance(v, str) else v) for k, v in raw.items()})


def details_to_dict(details: PaymentMethodDetails) -> Dict[str, Any]:
    """Plain dict form of a details variant, without unset optional fields."""
    if isinstance(details, FreeformDetails):
        return dict(details.fields)
    return {k: v for k, v in asdict(details).items() if v is not None}


@dataclass(frozen=True)
class PaymentMethod:
    """
    PaymentMethod domain entity.

    A manually verified way of paying, shown to users with instructions.
    """

    id: uuid.UUID
    name: str
    method_type: PaymentMethodType
    details: PaymentMethodDetails
    instructions: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate payment method entity."""
        if not self.name or not self.name.strip():
            raise ValidationError("Payment method name cannot be empty")
        if not self.instructions or not self.instructions.strip():
            raise ValidationError("Payment instructions are required")
        if not isinstance(self.details, DETAILS_BY_TYPE[self.method_type]):
            raise InvalidPaymentMethodDetailsError(
                f"Details do not match payment method type {self.method_type.value}"
            )

    @classmethod
    def create(
        cls,
        name: str,
        method_type,
        details: Optional[Dict[str, Any]],
        instructions: str,
        is_active: bool = True,
        method_id: Optional[uuid.UUID] = None,
    ) -> "PaymentMethod":
        """
        Create a new PaymentMethod entity.

        Args:
            name: Display name
            method_type: PaymentMethodType or its string value
            details: Plain dict parsed into the details variant for the type
            instructions: Payment instructions shown to users
            is_active: Whether users can pick the method
            method_id: Optional UUID (generated if not provided)

        Returns:
            PaymentMethod entity instance
        """
        kind = parse_method_type(method_type)
        now = utcnow()
        return cls(
            id=method_id or uuid.uuid4(),
            name=(name or "").strip(),
            method_type=kind,
            details=parse_details(kind, details),
            instructions=(instructions or "").strip(),
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def update(
        self,
        name: Optional[str] = None,
        method_type=None,
        details: Optional[Dict[str, Any]] = None,
        instructions: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> "PaymentMethod":
        """Return a copy with the given non-None fields changed."""
        kind = parse_method_type(method_type) if method_type is not None else self.method_type
        if details is not None:
            new_details = parse_details(kind, details)
        elif kind != self.method_type:
            new_details = parse_details(kind, details_to_dict(self.details))
        else:
            new_details = self.details
        return replace(
            self,
            name=name.strip() if name is not None else self.name,
            method_type=kind,
            details=new_details,
            instructions=instructions.strip() if instructions is not None else self.instructions,
            is_active=is_active if is_active is not None else self.is_active,
            updated_at=utcnow(),
        )
