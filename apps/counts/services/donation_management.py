"""
Donation management service.

Donations can only be added to or removed from OPEN counts. The parent
count row is locked for the duration so its total stays consistent.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.counts.models import Count, Donation, DonationType
from apps.members.models import Member
from apps.members.services import MemberNotFoundError

from .donor_receipts import initial_notification_status
from .exceptions import (
    CountNotFoundError,
    CountFinalizedError,
    DonationNotFoundError,
    InvalidDonationError,
)

logger = logging.getLogger(__name__)


def _lock_open_count(*, count_id: int, church_id: str) -> Count:
    try:
        count = (
            Count.objects
            .select_for_update()
            .get(id=count_id, church_id=church_id)
        )
    except Count.DoesNotExist:
        raise CountNotFoundError(f"Count with ID {count_id} not found")

    if not count.is_open:
        raise CountFinalizedError(f"Count '{count.name}' is finalized and can no longer change")

    return count


def list_donations(*, count_id: int, church_id: str) -> QuerySet[Donation]:
    """
    Donations of a count.

    Raises:
        CountNotFoundError: If the count doesn't exist in this church
    """
    if not Count.objects.filter(id=count_id, church_id=church_id).exists():
        raise CountNotFoundError(f"Count with ID {count_id} not found")

    return (
        Donation.objects
        .filter(count_id=count_id, church_id=church_id)
        .select_related('member')
    )


@transaction.atomic
def add_donation(
    *,
    church_id: str,
    count_id: int,
    amount: Decimal,
    donation_type: str,
    member_id: Optional[int] = None,
    check_number: str = '',
    date: Optional[datetime] = None,
    notes: str = ''
) -> Donation:
    """
    Record a donation in an open count.

    Args:
        church_id: ID of the church
        count_id: ID of the open count
        amount: Positive amount
        donation_type: CASH or CHECK
        member_id: Donor, or None for an anonymous gift
        check_number: Required for CHECK donations
        date: Gift date (defaults to now)
        notes: Optional notes

    Returns:
        Created Donation instance

    Raises:
        CountNotFoundError: If the count doesn't exist in this church
        CountFinalizedError: If the count is finalized
        MemberNotFoundError: If the member doesn't exist in this church
        InvalidDonationError: If amount or check details are invalid
    """
    count = _lock_open_count(count_id=count_id, church_id=church_id)

    if amount is None or amount <= 0:
        raise InvalidDonationError("Donation amount must be greater than zero")

    if donation_type not in DonationType.values:
        raise InvalidDonationError(f"Unknown donation type {donation_type}")

    if donation_type == DonationType.CHECK and not check_number:
        raise InvalidDonationError("Check donations require a check number")

    member = None
    if member_id is not None:
        member = Member.objects.filter(id=member_id, church_id=church_id).first()
        if member is None:
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

    donation = Donation.objects.create(
        church_id=church_id,
        count=count,
        member=member,
        amount=amount,
        donation_type=donation_type,
        check_number=check_number if donation_type == DonationType.CHECK else '',
        date=date or timezone.now(),
        notes=notes,
        notification_status=initial_notification_status(member),
    )

    count.update_total()
    return donation


@transaction.atomic
def remove_donation(*, donation_id: int, church_id: str) -> None:
    """
    Remove a donation from its open count.

    Raises:
        DonationNotFoundError: If the donation doesn't exist in this church
        CountFinalizedError: If its count is finalized
    """
    try:
        donation = Donation.objects.get(id=donation_id, church_id=church_id)
    except Donation.DoesNotExist:
        raise DonationNotFoundError(f"Donation with ID {donation_id} not found")

    count = _lock_open_count(count_id=donation.count_id, church_id=church_id)

    donation.delete()
    count.update_total()
    logger.info(f"Removed donation {donation_id} from count {count.id}")
