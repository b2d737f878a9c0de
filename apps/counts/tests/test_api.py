import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.counts.models import Count, CountStatus, Donation


@pytest.mark.django_db
class TestCountList:
    """Tests for GET /api/counts/"""

    def test_list_counts(self, counter_client, open_count, finalized_count, other_church_count):
        response = counter_client.get(reverse('counts:count-list'))

        assert response.status_code == status.HTTP_200_OK
        ids = {c['id'] for c in response.data['results']}
        assert ids == {open_count.id, finalized_count.id}

    def test_list_counts_by_status(self, counter_client, open_count, finalized_count):
        response = counter_client.get(reverse('counts:count-list'), {'status': 'OPEN'})

        assert [c['id'] for c in response.data['results']] == [open_count.id]

    def test_user_without_church_forbidden(self, api_client, db):
        from apps.accounts.models import User
        from rest_framework_simplejwt.tokens import RefreshToken

        loner = User.objects.create_user(email='loner@example.com', password='TestPass123!')
        refresh = RefreshToken.for_user(loner)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

        response = api_client.get(reverse('counts:count-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestCountCreateRetrieve:
    """Tests for POST /api/counts/ and GET /api/counts/{id}/"""

    def test_create_count(self, counter_client, church):
        response = counter_client.post(reverse('counts:count-list'), {
            'name': 'Palm Sunday',
            'service': '11am',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == CountStatus.OPEN
        assert Count.objects.get(id=response.data['id']).church_id == church.id

    def test_retrieve_other_church_count_not_found(self, counter_client, other_church_count):
        url = reverse('counts:count-detail', args=[other_church_count.id])
        response = counter_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestFinalize:
    """Tests for POST /api/counts/{id}/finalize/"""

    def test_admin_finalizes_count(self, treasurer_client, open_count, treasurer):
        url = reverse('counts:count-finalize', args=[open_count.id])
        response = treasurer_client.post(url, {'primary_attestor_name': 'Tess Treasurer'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == CountStatus.FINALIZED
        open_count.refresh_from_db()
        assert open_count.finalized_by == treasurer

    def test_standard_user_cannot_finalize(self, counter_client, open_count):
        url = reverse('counts:count-finalize', args=[open_count.id])
        response = counter_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        open_count.refresh_from_db()
        assert open_count.status == CountStatus.OPEN

    def test_finalize_twice_conflict(self, treasurer_client, finalized_count):
        url = reverse('counts:count-finalize', args=[finalized_count.id])
        response = treasurer_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestFinalizedCounts:
    """Tests for /api/counts/finalized/ and /api/counts/latest-finalized/"""

    def test_finalized_counts_scoped_to_church(
        self, counter_client, open_count, finalized_count, other_church
    ):
        Count.objects.create(church=other_church, name='Elsewhere', status=CountStatus.FINALIZED)

        response = counter_client.get(reverse('counts:count-finalized'))

        assert response.status_code == status.HTTP_200_OK
        assert [c['id'] for c in response.data] == [finalized_count.id]

    def test_latest_finalized(self, counter_client, finalized_count):
        response = counter_client.get(reverse('counts:count-latest-finalized'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == finalized_count.id
        assert Decimal(response.data['total_amount']) == Decimal('50.00')

    def test_latest_finalized_none(self, counter_client, open_count):
        response = counter_client.get(reverse('counts:count-latest-finalized'))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestDonations:
    """Tests for /api/counts/{id}/donations/ and /api/donations/{id}/"""

    def test_record_donation(self, counter_client, open_count, member):
        url = reverse('counts:count-donations', args=[open_count.id])
        response = counter_client.post(url, {
            'amount': '40.00',
            'donation_type': 'CASH',
            'member': member.id,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['member_name'] == 'John Smith'
        open_count.refresh_from_db()
        assert open_count.total_amount == Decimal('40.00')

    def test_check_without_number_rejected(self, counter_client, open_count):
        url = reverse('counts:count-donations', args=[open_count.id])
        response = counter_client.post(url, {'amount': '40.00', 'donation_type': 'CHECK'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_record_donation_in_finalized_count_conflict(self, counter_client, finalized_count):
        url = reverse('counts:count-donations', args=[finalized_count.id])
        response = counter_client.post(url, {'amount': '5.00', 'donation_type': 'CASH'})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_record_donation_for_outside_member_not_found(self, counter_client, open_count, outside_member):
        url = reverse('counts:count-donations', args=[open_count.id])
        response = counter_client.post(url, {
            'amount': '5.00',
            'donation_type': 'CASH',
            'member': outside_member.id,
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_donations(self, counter_client, finalized_count):
        url = reverse('counts:count-donations', args=[finalized_count.id])
        response = counter_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_remove_donation(self, counter_client, open_count, member):
        donation = Donation.objects.create(
            church=open_count.church, count=open_count, member=member,
            amount=Decimal('10.00'), donation_type='CASH',
        )

        response = counter_client.delete(reverse('counts:donation-detail', args=[donation.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Donation.objects.filter(id=donation.id).exists()

    def test_remove_finalized_donation_conflict(self, counter_client, finalized_count):
        donation = finalized_count.donations.get()

        response = counter_client.delete(reverse('counts:donation-detail', args=[donation.id]))

        assert response.status_code == status.HTTP_409_CONFLICT
