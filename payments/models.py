from payments.infrastructure.models import Payment  # noqa: F401
