"""
Count management service.

Counts move OPEN -> FINALIZED exactly once. All lookups are scoped by
``church_id``.
"""

import logging
from datetime import datetime
from functools import partial
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.counts.models import Count, CountStatus

from .donor_receipts import send_donation_receipts
from .exceptions import CountNotFoundError, InvalidStatusTransitionError

logger = logging.getLogger(__name__)


def list_counts(*, church_id: str, status: Optional[str] = None) -> QuerySet[Count]:
    """List a church's counts, newest first, optionally by status."""
    queryset = Count.objects.filter(church_id=church_id)
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def get_count(*, count_id: int, church_id: str) -> Count:
    """
    Get a count of a church.

    Raises:
        CountNotFoundError: If the count doesn't exist in this church
    """
    try:
        return Count.objects.get(id=count_id, church_id=church_id)
    except Count.DoesNotExist:
        raise CountNotFoundError(f"Count with ID {count_id} not found")


@transaction.atomic
def create_count(
    *,
    church_id: str,
    name: str,
    date: Optional[datetime] = None,
    service: str = '',
    notes: str = ''
) -> Count:
    """
    Open a new count.

    Args:
        church_id: ID of the owning church
        name: Display name, e.g. "January Week 1"
        date: Collection date (defaults to now)
        service: Optional service label
        notes: Optional notes

    Returns:
        Created Count in OPEN status
    """
    count = Count.objects.create(
        church_id=church_id,
        name=name,
        date=date or timezone.now(),
        service=service,
        notes=notes,
        status=CountStatus.OPEN,
    )
    logger.info(f"Opened count {count.id} '{name}' for church {church_id}")
    return count


@transaction.atomic
def finalize_count(
    *,
    count_id: int,
    church_id: str,
    finalized_by=None,
    primary_attestor_name: str = '',
    secondary_attestor_name: str = ''
) -> Count:
    """
    Finalize an open count.

    Locks the count row so concurrent donation entry and finalization
    serialize. The total is recomputed before the status flips. Donor
    receipts are mailed once the transaction commits.

    Raises:
        CountNotFoundError: If the count doesn't exist in this church
        InvalidStatusTransitionError: If the count is not OPEN
    """
    try:
        count = (
            Count.objects
            .select_for_update()
            .get(id=count_id, church_id=church_id)
        )
    except Count.DoesNotExist:
        raise CountNotFoundError(f"Count with ID {count_id} not found")

    if count.status != CountStatus.OPEN:
        raise InvalidStatusTransitionError(
            f"Cannot finalize count '{count.name}' in status {count.status}"
        )

    count.update_total()

    count.status = CountStatus.FINALIZED
    count.finalized_at = timezone.now()
    count.finalized_by = finalized_by
    count.primary_attestor_name = primary_attestor_name or count.primary_attestor_name
    count.secondary_attestor_name = secondary_attestor_name or count.secondary_attestor_name
    count.save(update_fields=[
        'status',
        'finalized_at',
        'finalized_by',
        'primary_attestor_name',
        'secondary_attestor_name',
        'updated_at',
    ])

    logger.info(f"Finalized count {count.id} for church {church_id}, total {count.total_amount}")
    transaction.on_commit(
        partial(send_donation_receipts, count_id=count.id, church_id=church_id),
        robust=True,
    )
    return count


def list_finalized_counts(*, church_id: str) -> QuerySet[Count]:
    """Finalized counts of a church ordered by collection date."""
    return (
        Count.objects
        .filter(church_id=church_id, status=CountStatus.FINALIZED)
        .order_by('date', 'id')
    )


def get_latest_finalized_count(*, church_id: str) -> Count:
    """
    Most recent finalized count of a church.

    Raises:
        CountNotFoundError: If the church has no finalized counts
    """
    count = (
        Count.objects
        .filter(church_id=church_id, status=CountStatus.FINALIZED)
        .order_by('-date', '-id')
        .first()
    )
    if count is None:
        raise CountNotFoundError("No finalized counts found")
    return count
