"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class ChurchInactiveError(AccountsServiceError):
    """Raised when the user's church is suspended or deleted."""

    def __init__(self, church_id, church_status):
        self.church_id = church_id
        self.church_status = church_status
        super().__init__(f"Church {church_id} is {church_status}")
