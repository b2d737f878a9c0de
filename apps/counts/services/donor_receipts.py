"""
Donor receipts.

Each donation carries a notification status. It starts as PENDING when the
donor has an email address and NOT_REQUIRED otherwise. Once the count is
finalized the PENDING receipts are mailed; every attempt ends as SENT or
FAILED. FAILED receipts can be resent on request.
"""

import logging
import smtplib
from dataclasses import dataclass

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from apps.counts.models import Count, CountStatus, Donation, NotificationStatus

from .exceptions import CountNotFoundError, CountNotFinalizedError

logger = logging.getLogger(__name__)

RECEIPT_SUBJECT = 'Thank You for Your Donation to {church_name}'

RECEIPT_BODY = """Dear {donor_name},

Thank you for your donation of ${amount} on {date} to {church_name}.

Donation Details:
- Amount: ${amount}
- Date: {date}
- Donation ID: #{donation_id}

This donation confirmation serves as your official receipt for tax purposes.

{church_name}
"""


@dataclass
class ReceiptSummary:
    sent: int = 0
    failed: int = 0
    not_required: int = 0


def initial_notification_status(member) -> str:
    """Status a new donation starts in, given its donor (or None)."""
    if member is None or not member.email:
        return NotificationStatus.NOT_REQUIRED
    return NotificationStatus.PENDING


def _set_status(donation: Donation, notification_status: str) -> None:
    donation.notification_status = notification_status
    donation.save(update_fields=['notification_status', 'updated_at'])


def send_donation_receipt(donation: Donation) -> str:
    """
    Mail one receipt and record the outcome on the donation.

    Returns:
        The donation's new notification status
    """
    member = donation.member
    if member is None or not member.email:
        _set_status(donation, NotificationStatus.NOT_REQUIRED)
        return NotificationStatus.NOT_REQUIRED

    church_name = donation.church.name
    context = {
        'donor_name': member.full_name,
        'amount': f'{donation.amount:.2f}',
        'date': timezone.localtime(donation.date).strftime('%B %d, %Y'),
        'church_name': church_name,
        'donation_id': f'{donation.id:06d}',
    }

    try:
        send_mail(
            RECEIPT_SUBJECT.format(church_name=church_name),
            RECEIPT_BODY.format(**context),
            settings.DEFAULT_FROM_EMAIL,
            [member.email],
            fail_silently=False,
        )
    except (smtplib.SMTPException, OSError):
        logger.exception(f"Failed to send receipt for donation {donation.id} to {member.email}")
        _set_status(donation, NotificationStatus.FAILED)
        return NotificationStatus.FAILED

    _set_status(donation, NotificationStatus.SENT)
    return NotificationStatus.SENT


def send_donation_receipts(*, count_id: int, church_id: str, include_failed: bool = False) -> ReceiptSummary:
    """
    Mail the outstanding receipts of a finalized count.

    Args:
        count_id: ID of the count
        church_id: ID of the church owning the count
        include_failed: Also retry receipts that failed before

    Raises:
        CountNotFoundError: If the count doesn't exist in this church
        CountNotFinalizedError: If the count is still open
    """
    try:
        count = Count.objects.get(id=count_id, church_id=church_id)
    except Count.DoesNotExist:
        raise CountNotFoundError(f"Count with ID {count_id} not found")

    if count.status != CountStatus.FINALIZED:
        raise CountNotFinalizedError(f"Count '{count.name}' is not finalized yet")

    statuses = [NotificationStatus.PENDING]
    if include_failed:
        statuses.append(NotificationStatus.FAILED)

    donations = (
        Donation.objects
        .filter(count=count, church_id=church_id, notification_status__in=statuses)
        .select_related('member', 'church')
        .order_by('id')
    )

    summary = ReceiptSummary()
    for donation in donations:
        outcome = send_donation_receipt(donation)
        if outcome == NotificationStatus.SENT:
            summary.sent += 1
        elif outcome == NotificationStatus.FAILED:
            summary.failed += 1
        else:
            summary.not_required += 1

    logger.info(
        f"Receipts for count {count.id} in church {church_id}: "
        f"{summary.sent} sent, {summary.failed} failed"
    )
    return summary
