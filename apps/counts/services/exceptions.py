"""
Domain exceptions for counts app.

Raised by the counts services and translated to HTTP responses in views.
"""


class CountsServiceError(Exception):
    """Base exception for count and donation service errors."""
    pass


class CountNotFoundError(CountsServiceError):
    """Raised when a count does not exist in the requesting church."""
    pass


class DonationNotFoundError(CountsServiceError):
    """Raised when a donation does not exist in the requesting church."""
    pass


class CountFinalizedError(CountsServiceError):
    """Raised when modifying the donations of a finalized count."""
    pass


class InvalidStatusTransitionError(CountsServiceError):
    """Raised when a count status change is not allowed."""
    pass


class InvalidDonationError(CountsServiceError):
    """Raised when donation data breaks a business rule."""
    pass


class CountNotFinalizedError(CountsServiceError):
    """Raised when an operation needs a finalized count but it is still open."""
    pass
