# ==========================================
# apps/members/models.py
# ==========================================

from django.db import models


class Member(models.Model):
    """A donor or congregant tracked by one church."""

    church = models.ForeignKey('churches.Church', on_delete=models.CASCADE, related_name='members')
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    is_visitor = models.BooleanField(default=False)
    notes = models.TextField(blank=True)

    # External system integration (e.g. Planning Center imports)
    external_id = models.CharField(max_length=100, blank=True)
    external_system = models.CharField(max_length=50, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'members'
        indexes = [
            models.Index(fields=['church', 'last_name', 'first_name'], name='members_church_name_idx'),
        ]
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
