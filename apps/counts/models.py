from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal


class CountStatus(models.TextChoices):
    OPEN = 'OPEN', 'Open'
    FINALIZED = 'FINALIZED', 'Finalized'


class DonationType(models.TextChoices):
    CASH = 'CASH', 'Cash'
    CHECK = 'CHECK', 'Check'


class NotificationStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    SENT = 'SENT', 'Sent'
    FAILED = 'FAILED', 'Failed'
    NOT_REQUIRED = 'NOT_REQUIRED', 'Not required'


class Count(models.Model):
    """
    One collection/counting session of donations.

    A count is assembled while OPEN and becomes read-only once FINALIZED.
    """

    church = models.ForeignKey('churches.Church', on_delete=models.CASCADE, related_name='counts')
    name = models.CharField(max_length=200)
    date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=CountStatus.choices, default=CountStatus.OPEN)
    service = models.CharField(max_length=100, blank=True)
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )
    notes = models.TextField(blank=True)

    # Attestation
    primary_attestor_name = models.CharField(max_length=200, blank=True)
    secondary_attestor_name = models.CharField(max_length=200, blank=True)
    finalized_at = models.DateTimeField(null=True, blank=True)
    finalized_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='finalized_counts'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'counts'
        indexes = [
            models.Index(fields=['church', 'status'], name='counts_church_status_idx'),
            models.Index(fields=['church', 'date'], name='counts_church_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.name} ({self.status})"

    @property
    def is_open(self):
        return self.status == CountStatus.OPEN

    def update_total(self):
        """Recalculate total_amount from the count's donations."""
        total = self.donations.aggregate(total=models.Sum('amount'))['total'] or Decimal('0.00')
        self.total_amount = total
        self.save(update_fields=['total_amount', 'updated_at'])


class Donation(models.Model):
    """A single cash or check gift recorded in a count."""

    church = models.ForeignKey('churches.Church', on_delete=models.CASCADE, related_name='donations')
    count = models.ForeignKey(Count, on_delete=models.CASCADE, related_name='donations')
    # Anonymous gifts have no member; deleting a member keeps its history
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donations'
    )

    date = models.DateTimeField(default=timezone.now)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    donation_type = models.CharField(max_length=10, choices=DonationType.choices)
    check_number = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)
    notification_status = models.CharField(
        max_length=20,
        choices=NotificationStatus.choices,
        default=NotificationStatus.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'donations'
        indexes = [
            models.Index(fields=['member', 'count'], name='donations_member_count_idx'),
            models.Index(fields=['church', 'date'], name='donations_church_date_idx'),
        ]
        ordering = ['date', 'created_at']

    def __str__(self):
        donor = self.member.full_name if self.member else "Anonymous"
        return f"{donor}: {self.amount} ({self.donation_type})"
