"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q

from core.domain.exceptions import LicenseKeyGenerationError, LicenseNotFoundError
from core.domain.value_objects import LicenseStatus
from core.metrics import license_key_collisions_total
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseAccount
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 5


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    The synchronous helpers (_insert, _update, _delete_for_request) are also
    used by the lifecycle unit of work inside its own transaction.
    """

    def _queryset(self):
        return LicenseModel.objects.prefetch_related("accounts")

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            first_name=model.first_name,
            last_name=model.last_name,
            account_ids=tuple(a.account_id for a in model.accounts.all()),
            expires_at=model.expires_at,
            status=LicenseStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            request_id=model.license_request_id,
            metadata=dict(model.metadata or {}),
        )

    def _write_accounts(self, model: LicenseModel, account_ids) -> None:
        LicenseAccount.objects.filter(license=model).delete()
        LicenseAccount.objects.bulk_create(
            [
                LicenseAccount(license=model, account_id=account_id, position=position)
                for position, account_id in enumerate(account_ids)
            ]
        )

    def _insert(self, license: License) -> License:
        """
        Insert a license, regenerating the key on a uniqueness collision.

        Each attempt runs in a savepoint so a collision does not abort the
        surrounding transaction.
        """
        candidate = license
        for attempt in range(1, MAX_KEY_ATTEMPTS + 1):
            try:
                with transaction.atomic():
                    model = LicenseModel.objects.create(
                        id=candidate.id,
                        license_key=candidate.license_key,
                        first_name=candidate.first_name,
                        last_name=candidate.last_name,
                        status=candidate.status.value,
                        expires_at=candidate.expires_at,
                        metadata=candidate.metadata,
                        license_request_id=candidate.request_id,
                        created_at=candidate.created_at,
                        updated_at=candidate.updated_at,
                    )
                    self._write_accounts(model, candidate.account_ids)
            except IntegrityError:
                if not LicenseModel.objects.filter(license_key=candidate.license_key).exists():
                    raise
                license_key_collisions_total.inc()
                logger.warning(
                    "License key collision, regenerating",
                    extra={"attempt": attempt, "license_id": str(candidate.id)},
                )
                candidate = candidate.with_new_key()
                continue
            return self._to_domain(self._queryset().get(id=model.id))
        raise LicenseKeyGenerationError(
            f"No unique license key after {MAX_KEY_ATTEMPTS} attempts"
        )

    def _update(self, license: License) -> License:
        with transaction.atomic():
            updated = LicenseModel.objects.filter(id=license.id).update(
                first_name=license.first_name,
                last_name=license.last_name,
                status=license.status.value,
                expires_at=license.expires_at,
                metadata=license.metadata,
                updated_at=license.updated_at,
            )
            if not updated:
                raise LicenseNotFoundError(f"License {license.id} not found")
            model = LicenseModel.objects.get(id=license.id)
            self._write_accounts(model, license.account_ids)
        return self._to_domain(self._queryset().get(id=license.id))

    def _delete_for_request(self, request_id: uuid.UUID) -> List[License]:
        """Delete every license issued for a request and return them."""
        models = list(self._queryset().filter(license_request_id=request_id))
        deleted = [self._to_domain(model) for model in models]
        LicenseModel.objects.filter(id__in=[m.id for m in models]).delete()
        return deleted

    @sync_to_async
    def add(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity, possibly with a regenerated key
        """
        with transaction.atomic():
            return self._insert(license)

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save changes to an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        return self._update(license)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            return self._to_domain(self._queryset().get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_account_id(self, account_id: str) -> List[License]:
        """
        Find all licenses covering an account ID.

        Args:
            account_id: Numeric account ID

        Returns:
            List of License entities, newest first
        """
        models = self._queryset().filter(accounts__account_id=account_id).distinct()
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_expired_active(self, current_time: datetime) -> List[License]:
        models = self._queryset().filter(status="active", expires_at__lt=current_time)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def list(
        self,
        status: Optional[LicenseStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[License], int]:
        """
        List licenses, newest first.

        Returns:
            Tuple of (page of licenses, total matching)
        """
        queryset = self._queryset()
        if status:
            queryset = queryset.filter(status=status.value)
        if search:
            queryset = queryset.filter(
                Q(license_key__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(accounts__account_id=search)
            ).distinct()
        total = queryset.count()
        page = queryset.order_by("-created_at")[offset : offset + limit]
        return [self._to_domain(model) for model in page], total
