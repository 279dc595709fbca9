"""
Database utilities and transaction management.
"""

import functools

from asgiref.sync import sync_to_async
from django.db import transaction


def async_atomic(func):
    """
    Run a synchronous ORM function inside transaction.atomic() and expose it
    as a coroutine.

    Usage:
        @async_atomic
        def commit(self, change):
            ...

        await uow.commit(change)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with transaction.atomic():
            return func(*args, **kwargs)

    return sync_to_async(wrapper)
