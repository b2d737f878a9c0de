"""
Members app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions.
"""

from .exceptions import (
    MembersServiceError,
    MemberNotFoundError,
    MemberHasOpenCountsError,
    EligibilityCheckError,
)

from .deletion_eligibility import (
    ERROR_CHECKING_COUNTS,
    DeletionEligibility,
    can_delete_member,
    check_member_deletion,
)

from .member_management import (
    list_members,
    get_member,
    create_member,
    update_member,
    delete_member,
)

from .member_import import (
    ImportResult,
    import_members,
)


__all__ = [
    # Exceptions
    'MembersServiceError',
    'MemberNotFoundError',
    'MemberHasOpenCountsError',
    'EligibilityCheckError',

    # Deletion eligibility
    'ERROR_CHECKING_COUNTS',
    'DeletionEligibility',
    'can_delete_member',
    'check_member_deletion',

    # Member management
    'list_members',
    'get_member',
    'create_member',
    'update_member',
    'delete_member',

    # Member import
    'ImportResult',
    'import_members',
]
