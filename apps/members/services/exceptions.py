"""
Domain-specific exceptions for members app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MembersServiceError(Exception):
    """Base exception for all members service errors."""
    pass


class MemberNotFoundError(MembersServiceError):
    """Raised when a member does not exist in the requesting church."""
    pass


class MemberHasOpenCountsError(MembersServiceError):
    """Raised when deleting a member whose donations sit in open counts."""

    def __init__(self, message, open_counts):
        super().__init__(message)
        self.open_counts = list(open_counts)


class EligibilityCheckError(MembersServiceError):
    """Raised when the deletion-eligibility query could not be completed."""
    pass
