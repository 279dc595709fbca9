"""
Catalog module - SubscriptionPlan and PaymentMethod reference data.

This module handles:
- SubscriptionPlan entity (duration, price)
- PaymentMethod entity with typed details per method kind
- Catalog repositories and admin curation handlers
"""
