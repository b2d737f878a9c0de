# ==========================================
# apps/churches/models.py
# ==========================================

from django.db import models


class ChurchStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    SUSPENDED = 'SUSPENDED', 'Suspended'
    DELETED = 'DELETED', 'Deleted'


class Church(models.Model):
    """Tenant. Every member, count and donation belongs to exactly one church."""

    id = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=ChurchStatus.choices, default=ChurchStatus.ACTIVE)
    contact_email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=50, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    denomination = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'churches'
        indexes = [
            models.Index(fields=['status'], name='churches_status_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_active(self):
        return self.status == ChurchStatus.ACTIVE
