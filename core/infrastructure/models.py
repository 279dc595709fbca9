"""
AuditLog model.
"""
import uuid

from django.db import models


class AuditLog(models.Model):
    """
    Immutable audit trail of lifecycle, payment and license events.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64, db_index=True)
    action = models.CharField(max_length=64)
    changes = models.JSONField(default=dict, help_text="Event payload")
    actor = models.CharField(max_length=255, blank=True, help_text="Who performed the action")
    occurred_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"]),
            models.Index(fields=["action"]),
            models.Index(fields=["occurred_at"]),
        ]

    def __str__(self):
        return f"{self.action} - {self.entity_type} {self.entity_id}"
