"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every concrete exception
belongs to exactly one error kind (ValidationError, ConflictError,
ForbiddenError, NotFoundError, InvalidStateError), which the API
layer maps to an HTTP status code.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


# Error kinds


class ValidationError(DomainException):
    """Malformed or missing input."""

    def __init__(self, message: str = "Invalid input", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class ConflictError(DomainException):
    """The operation collides with existing state."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class ForbiddenError(DomainException):
    """The caller is not allowed to perform the operation."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class NotFoundError(DomainException):
    """A referenced record does not exist."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class InvalidStateError(DomainException):
    """The operation is not legal for the record's current status."""

    def __init__(self, message: str = "Invalid state", code: str = "INVALID_STATE"):
        super().__init__(message, code=code)


# Validation


class InvalidAccountIdError(ValidationError):
    """Raised when an account ID is not a numeric string."""

    def __init__(self, message: str = "Account IDs must be numeric"):
        super().__init__(message, code="INVALID_ACCOUNT_ID")


class MissingExpiryDateError(ValidationError):
    """Raised when a license-issuing decision has no expiry date."""

    def __init__(self, message: str = "Expiry date is required to issue a license"):
        super().__init__(message, code="MISSING_EXPIRY_DATE")


class InvalidDecisionActionError(ValidationError):
    """Raised when an admin decision action is unknown."""

    def __init__(self, message: str = "Invalid action"):
        super().__init__(message, code="INVALID_ACTION")


class InvalidPaymentAmountError(ValidationError):
    """Raised when a payment amount or currency is malformed."""

    def __init__(self, message: str = "Invalid payment amount"):
        super().__init__(message, code="INVALID_PAYMENT_AMOUNT")


class InvalidLicenseKeyError(ValidationError):
    """Raised when a license key does not match the key format."""

    def __init__(self, message: str = "Invalid license key"):
        super().__init__(message, code="INVALID_LICENSE_KEY")


class InvalidPaymentMethodDetailsError(ValidationError):
    """Raised when payment method details do not fit the method type."""

    def __init__(self, message: str = "Invalid payment method details"):
        super().__init__(message, code="INVALID_PAYMENT_METHOD_DETAILS")


class InactiveCatalogEntryError(ValidationError):
    """Raised when an inactive plan or payment method is referenced."""

    def __init__(self, message: str = "Catalog entry is not active"):
        super().__init__(message, code="CATALOG_ENTRY_INACTIVE")


# Conflict


class OpenLicenseRequestExistsError(ConflictError):
    """Raised when a user already has a request awaiting a decision."""

    def __init__(self, message: str = "You already have a pending license request"):
        super().__init__(message, code="OPEN_REQUEST_EXISTS")


class CatalogEntryExistsError(ConflictError):
    """Raised when a catalog entry name is already taken."""

    def __init__(self, message: str = "Catalog entry already exists"):
        super().__init__(message, code="CATALOG_ENTRY_EXISTS")


# Forbidden


class AdminRequiredError(ForbiddenError):
    """Raised when a non-admin attempts an admin operation."""

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, code="ADMIN_REQUIRED")


class NotRequestOwnerError(ForbiddenError):
    """Raised when a user acts on a request or payment they do not own."""

    def __init__(self, message: str = "You do not own this license request"):
        super().__init__(message, code="NOT_OWNER")


# Not found


class LicenseRequestNotFoundError(NotFoundError):
    """Raised when a license request is not found."""

    def __init__(self, message: str = "License request not found"):
        super().__init__(message, code="LICENSE_REQUEST_NOT_FOUND")


class PaymentNotFoundError(NotFoundError):
    """Raised when a payment is not found."""

    def __init__(self, message: str = "Payment not found"):
        super().__init__(message, code="PAYMENT_NOT_FOUND")


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class AccountNotLicensedError(NotFoundError):
    """Raised when no license covers an account ID."""

    def __init__(self, message: str = "No license found for this account"):
        super().__init__(message, code="ACCOUNT_NOT_LICENSED")


class SubscriptionPlanNotFoundError(NotFoundError):
    """Raised when a subscription plan is not found."""

    def __init__(self, message: str = "Subscription plan not found"):
        super().__init__(message, code="SUBSCRIPTION_PLAN_NOT_FOUND")


class PaymentMethodNotFoundError(NotFoundError):
    """Raised when a payment method is not found."""

    def __init__(self, message: str = "Payment method not found"):
        super().__init__(message, code="PAYMENT_METHOD_NOT_FOUND")


# Invalid state


class InvalidRequestTransitionError(InvalidStateError):
    """Raised when a request action is not legal for its status."""

    def __init__(self, message: str = "License request has already been processed"):
        super().__init__(message, code="INVALID_REQUEST_STATUS")


class InvalidPaymentTransitionError(InvalidStateError):
    """Raised when a payment action is not legal for its status."""

    def __init__(self, message: str = "Payment has already been processed"):
        super().__init__(message, code="INVALID_PAYMENT_STATUS")


class ConcurrentUpdateError(InvalidStateError):
    """Raised when a record changed status between read and write."""

    def __init__(self, message: str = "Record was modified concurrently"):
        super().__init__(message, code="CONCURRENT_UPDATE")


class ApprovedRequestDeletionError(InvalidStateError):
    """Raised when deleting an approved request without revoking its license."""

    def __init__(
        self,
        message: str = "Approved requests can only be deleted together with their license",
    ):
        super().__init__(message, code="APPROVED_REQUEST_DELETION")


class LicenseKeyGenerationError(DomainException):
    """Raised when no unique license key could be generated."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="LICENSE_KEY_GENERATION_FAILED")
