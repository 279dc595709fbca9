from catalog.infrastructure.models import PaymentMethod, SubscriptionPlan  # noqa: F401
