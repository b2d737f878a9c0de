import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.churches.models import Church, ChurchStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def church(db):
    return Church.objects.create(
        id='ORG1',
        name='Grace Community Church',
        contact_email='office@grace.example.com',
    )


@pytest.fixture
def user(church):
    """Create and return a church admin."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        first_name='Test',
        last_name='User',
        church=church,
        role=UserRole.ADMIN,
    )


@pytest.fixture
def user_inactive(church):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        church=church,
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def suspended_church(db):
    return Church.objects.create(
        id='ORG9',
        name='Closed Chapel',
        status=ChurchStatus.SUSPENDED,
    )


@pytest.fixture
def user_suspended_church(suspended_church):
    """Create and return a user whose church is suspended."""
    return User.objects.create_user(
        email='closed@example.com',
        password='TestPass123!',
        church=suspended_church,
        role=UserRole.ADMIN,
    )
