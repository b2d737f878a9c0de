"""
Member deletion eligibility.

A member may be deleted only when none of their donations sit in a count
that is still OPEN for the same church. Counts in any other status never
block deletion, and counts of other churches are never looked at.

Two entry points:

- ``check_member_deletion`` reports the real outcome and raises
  ``EligibilityCheckError`` when the database cannot answer.
- ``can_delete_member`` is what callers consume. It never raises; an
  unanswerable check becomes ``can_delete=False`` with the
  ``ERROR_CHECKING_COUNTS`` sentinel in ``open_counts``.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from django.db import DatabaseError
from django.db.models import QuerySet

from apps.counts.models import CountStatus, Donation

from .exceptions import EligibilityCheckError

logger = logging.getLogger(__name__)

ERROR_CHECKING_COUNTS = 'Error checking counts'


@dataclass(frozen=True)
class DeletionEligibility:
    """Result of a deletion-eligibility check."""

    can_delete: bool
    open_counts: List[str] = field(default_factory=list)

    def to_dict(self):
        return {'canDelete': self.can_delete, 'openCounts': list(self.open_counts)}


def open_count_names_query(*, member_id: int, church_id: str) -> QuerySet:
    """
    Names of OPEN counts of ``church_id`` holding donations of ``member_id``.

    One row per matching donation, in database order, so a count name
    repeats once per donation it holds.
    """
    if not church_id:
        raise EligibilityCheckError("church_id is required to scope the query")

    return (
        Donation.objects
        .filter(
            member_id=member_id,
            count__church_id=church_id,
            count__status=CountStatus.OPEN,
        )
        .order_by()
        .values_list('count__name', flat=True)
    )


def check_member_deletion(*, member_id: int, church_id: str) -> DeletionEligibility:
    """
    Check whether a member can be deleted.

    Args:
        member_id: ID of the member
        church_id: ID of the church the member belongs to

    Returns:
        DeletionEligibility with the distinct open count names in
        first-seen order

    Raises:
        EligibilityCheckError: If the query fails
    """
    try:
        names = list(open_count_names_query(member_id=member_id, church_id=church_id))
    except DatabaseError as e:
        raise EligibilityCheckError(f"Could not check open counts for member {member_id}: {e}") from e

    open_counts = list(dict.fromkeys(names))

    return DeletionEligibility(can_delete=not open_counts, open_counts=open_counts)


def can_delete_member(member_id: int, church_id: str) -> DeletionEligibility:
    """
    Fail-closed deletion check.

    Same as ``check_member_deletion`` but never raises: any failure, not
    only ``EligibilityCheckError``, yields
    ``DeletionEligibility(False, [ERROR_CHECKING_COUNTS])``.
    """
    try:
        return check_member_deletion(member_id=member_id, church_id=church_id)
    except Exception:
        logger.exception(f"Error checking member deletion for member {member_id} in church {church_id}")
        return DeletionEligibility(can_delete=False, open_counts=[ERROR_CHECKING_COUNTS])
