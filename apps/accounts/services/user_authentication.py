"""Staff login against a church tenant."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError, ChurchInactiveError

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate a church staff member by email and password.

    The user row is locked while last_login is written. Staff of a
    suspended or deleted church cannot sign in; users not bound to
    any church (site admins) are let through and stopped later by
    the church permission checks.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: The user account is deactivated
        ChurchInactiveError: The user's church is not ACTIVE
    """
    try:
        user = (
            User.objects
            .select_for_update(of=('self',))
            .select_related('church')
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    church = user.church
    if church is not None and not church.is_active:
        logger.warning(
            f"Login refused for {user.email}: church {church.id} is {church.status}"
        )
        raise ChurchInactiveError(church.id, church.status)

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
