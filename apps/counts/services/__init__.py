"""
Counts app services layer.

Collection counts and the donations recorded in them. Every function is
scoped by a required ``church_id`` keyword.
"""

from .exceptions import (
    CountsServiceError,
    CountNotFoundError,
    DonationNotFoundError,
    CountFinalizedError,
    InvalidStatusTransitionError,
    InvalidDonationError,
    CountNotFinalizedError,
)

from .count_management import (
    list_counts,
    get_count,
    create_count,
    finalize_count,
    list_finalized_counts,
    get_latest_finalized_count,
)

from .donation_management import (
    list_donations,
    add_donation,
    remove_donation,
)

from .donor_receipts import (
    ReceiptSummary,
    initial_notification_status,
    send_donation_receipt,
    send_donation_receipts,
)


__all__ = [
    # Exceptions
    'CountsServiceError',
    'CountNotFoundError',
    'DonationNotFoundError',
    'CountFinalizedError',
    'InvalidStatusTransitionError',
    'InvalidDonationError',
    'CountNotFinalizedError',

    # Count management
    'list_counts',
    'get_count',
    'create_count',
    'finalize_count',
    'list_finalized_counts',
    'get_latest_finalized_count',

    # Donation management
    'list_donations',
    'add_donation',
    'remove_donation',

    # Donor receipts
    'ReceiptSummary',
    'initial_notification_status',
    'send_donation_receipt',
    'send_donation_receipts',
]
