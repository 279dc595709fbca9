"""
Core module for the shared kernel.

This module contains:
- Domain events, exceptions and value objects
- Infrastructure abstractions (event bus, cache, audit log)
- Middleware components
- Health checks, Celery tasks and management commands
"""
