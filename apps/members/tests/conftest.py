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
    """Create the church most tests run in."""
    return Church.objects.create(
        id='ORG1',
        name='Grace Community Church',
        contact_email='office@grace.example.com',
    )


@pytest.fixture
def other_church(db):
    """Create a second, unrelated church."""
    return Church.objects.create(
        id='ORG2',
        name='Hope Chapel',
        contact_email='office@hope.example.com',
    )


@pytest.fixture
def church_admin(church):
    """Create an admin user of the church."""
    return User.objects.create_user(
        email='admin@grace.example.com',
        password='TestPass123!',
        first_name='Ada',
        last_name='Admin',
        church=church,
        role=UserRole.ADMIN,
    )


@pytest.fixture
def church_usher(church):
    """Create a standard (non-admin) user of the church."""
    return User.objects.create_user(
        email='usher@grace.example.com',
        password='TestPass123!',
        first_name='Uri',
        last_name='Usher',
        church=church,
        role=UserRole.STANDARD,
    )


@pytest.fixture
def admin_client(api_client, church_admin):
    """Return API client authenticated as the church admin."""
    refresh = RefreshToken.for_user(church_admin)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def usher_client(api_client, church_usher):
    """Return API client authenticated as the standard user."""
    refresh = RefreshToken.for_user(church_usher)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member(church):
    """Member 42 of ORG1."""
    return Member.objects.create(
        id=42,
        church=church,
        first_name='John',
        last_name='Smith',
        email='john.smith@example.com',
    )


@pytest.fixture
def other_member(church):
    """Another member of ORG1."""
    return Member.objects.create(
        church=church,
        first_name='Mary',
        last_name='Jones',
    )


@pytest.fixture
def open_count(church):
    """Open count in ORG1."""
    return Count.objects.create(church=church, name='January Week 1', status=CountStatus.OPEN)


@pytest.fixture
def second_open_count(church):
    """Another open count in ORG1."""
    return Count.objects.create(church=church, name='January Week 2', status=CountStatus.OPEN)


@pytest.fixture
def finalized_count(church):
    """Finalized count in ORG1."""
    return Count.objects.create(church=church, name='December', status=CountStatus.FINALIZED)


@pytest.fixture
def other_church_open_count(other_church):
    """Open count that belongs to ORG2."""
    return Count.objects.create(church=other_church, name='ORG2 Sunday', status=CountStatus.OPEN)


@pytest.fixture
def make_donation():
    """Factory recording a donation straight in the database."""
    def _make(*, count, member, amount='25.00'):
        return Donation.objects.create(
            church_id=count.church_id,
            count=count,
            member=member,
            amount=Decimal(amount),
            donation_type=DonationType.CASH,
        )
    return _make
