import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.churches.models import Church
from apps.counts.models import Count, CountStatus, Donation, DonationType
from apps.members.models import Member


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
def other_church(db):
    return Church.objects.create(
        id='ORG2',
        name='Hope Chapel',
        contact_email='office@hope.example.com',
    )


@pytest.fixture
def treasurer(church):
    """Church admin who finalizes counts."""
    return User.objects.create_user(
        email='treasurer@grace.example.com',
        password='TestPass123!',
        first_name='Tess',
        last_name='Treasurer',
        church=church,
        role=UserRole.ADMIN,
    )


@pytest.fixture
def counter(church):
    """Standard user entering donations."""
    return User.objects.create_user(
        email='counter@grace.example.com',
        password='TestPass123!',
        church=church,
        role=UserRole.STANDARD,
    )


@pytest.fixture
def treasurer_client(api_client, treasurer):
    refresh = RefreshToken.for_user(treasurer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def counter_client(api_client, counter):
    refresh = RefreshToken.for_user(counter)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member(church):
    return Member.objects.create(church=church, first_name='John', last_name='Smith')


@pytest.fixture
def outside_member(other_church):
    return Member.objects.create(church=other_church, first_name='Out', last_name='Sider')


@pytest.fixture
def open_count(church):
    return Count.objects.create(church=church, name='January Week 1')


@pytest.fixture
def finalized_count(church):
    count = Count.objects.create(
        church=church,
        name='December',
        status=CountStatus.FINALIZED,
        total_amount=Decimal('50.00'),
    )
    Donation.objects.create(
        church=church,
        count=count,
        amount=Decimal('50.00'),
        donation_type=DonationType.CASH,
    )
    return count


@pytest.fixture
def other_church_count(other_church):
    return Count.objects.create(church=other_church, name='ORG2 Sunday')


@pytest.fixture
def donor(church):
    """Member with an email address, so receipts go out."""
    return Member.objects.create(
        church=church,
        first_name='Grace',
        last_name='Giver',
        email='grace.giver@example.com',
    )
