"""
Member management service.

Every function takes ``church_id`` as a required keyword argument and only
ever touches members of that church.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.members.models import Member

from .deletion_eligibility import can_delete_member
from .exceptions import MemberNotFoundError, MemberHasOpenCountsError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'first_name',
    'last_name',
    'email',
    'phone',
    'is_visitor',
    'notes',
    'external_id',
    'external_system',
)


def list_members(*, church_id: str, search: Optional[str] = None) -> QuerySet[Member]:
    """
    List a church's members, optionally filtered by name or email.

    Args:
        church_id: ID of the church
        search: Case-insensitive substring matched against names and email

    Returns:
        QuerySet of Member instances
    """
    queryset = Member.objects.filter(church_id=church_id)

    if search:
        queryset = queryset.filter(
            Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
            | Q(email__icontains=search)
        )

    return queryset


def get_member(*, member_id: int, church_id: str) -> Member:
    """
    Get a member of a church.

    Raises:
        MemberNotFoundError: If the member doesn't exist in this church
    """
    try:
        return Member.objects.get(id=member_id, church_id=church_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")


@transaction.atomic
def create_member(
    *,
    church_id: str,
    first_name: str,
    last_name: str,
    **fields
) -> Member:
    """
    Create a member in a church.

    Args:
        church_id: ID of the owning church
        first_name: Member's first name
        last_name: Member's last name
        **fields: Any of email, phone, is_visitor, notes,
            external_id, external_system

    Returns:
        Created Member instance
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected member fields: {', '.join(sorted(unknown))}")

    return Member.objects.create(
        church_id=church_id,
        first_name=first_name,
        last_name=last_name,
        **fields
    )


@transaction.atomic
def update_member(*, member_id: int, church_id: str, **fields) -> Member:
    """
    Update a member's details.

    Raises:
        MemberNotFoundError: If the member doesn't exist in this church
    """
    try:
        member = (
            Member.objects
            .select_for_update()
            .get(id=member_id, church_id=church_id)
        )
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    changed = []
    for name in UPDATABLE_FIELDS:
        if name in fields:
            setattr(member, name, fields[name])
            changed.append(name)

    if changed:
        member.save(update_fields=changed + ['updated_at'])

    return member


@transaction.atomic
def delete_member(*, member_id: int, church_id: str) -> None:
    """
    Delete a member if none of their donations are in an open count.

    The member row is locked and the eligibility check runs inside the
    same transaction as the delete. Donations in finalized counts are kept
    with their member reference cleared.

    Args:
        member_id: ID of the member
        church_id: ID of the church the member belongs to

    Raises:
        MemberNotFoundError: If the member doesn't exist in this church
        MemberHasOpenCountsError: If the member has donations in open
            counts, or the check could not be completed
    """
    try:
        member = (
            Member.objects
            .select_for_update()
            .get(id=member_id, church_id=church_id)
        )
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    eligibility = can_delete_member(member.id, church_id)
    if not eligibility.can_delete:
        logger.warning(
            f"Refused to delete member {member_id} in church {church_id}: "
            f"open counts {eligibility.open_counts}"
        )
        raise MemberHasOpenCountsError(
            f"{member.full_name} has donations in open counts",
            eligibility.open_counts,
        )

    member.delete()
    logger.info(f"Deleted member {member_id} from church {church_id}")
