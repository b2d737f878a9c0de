"""
Service layer unit tests for counts app.

Tests cover:
- Count lifecycle (OPEN -> FINALIZED, once)
- Finalized counts are immutable
- Totals stay in sync with donations
- Church scoping
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from apps.counts.models import Count, CountStatus, Donation, DonationType
from apps.counts.services import (
    list_counts,
    get_count,
    create_count,
    finalize_count,
    list_finalized_counts,
    get_latest_finalized_count,
    list_donations,
    add_donation,
    remove_donation,
    CountNotFoundError,
    DonationNotFoundError,
    CountFinalizedError,
    InvalidStatusTransitionError,
    InvalidDonationError,
)
from apps.members.services import MemberNotFoundError


@pytest.mark.django_db
class TestCountManagement:
    """Tests for count_management.py service functions."""

    def test_create_count_is_open(self, church):
        count = create_count(church_id=church.id, name='Easter Sunday', service='9am')

        assert count.status == CountStatus.OPEN
        assert count.total_amount == Decimal('0.00')
        assert count.church_id == 'ORG1'

    def test_get_count_other_church_not_found(self, other_church_count):
        with pytest.raises(CountNotFoundError):
            get_count(count_id=other_church_count.id, church_id='ORG1')

    def test_list_counts_filters_status(self, open_count, finalized_count, other_church_count):
        assert list(list_counts(church_id='ORG1', status=CountStatus.OPEN)) == [open_count]
        assert set(list_counts(church_id='ORG1')) == {open_count, finalized_count}

    def test_finalize_count(self, open_count, treasurer):
        add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('20.00'),
                     donation_type=DonationType.CASH)

        count = finalize_count(
            count_id=open_count.id,
            church_id='ORG1',
            finalized_by=treasurer,
            primary_attestor_name='Tess Treasurer',
            secondary_attestor_name='Sam Second',
        )

        assert count.status == CountStatus.FINALIZED
        assert count.finalized_at is not None
        assert count.finalized_by == treasurer
        assert count.total_amount == Decimal('20.00')
        assert count.secondary_attestor_name == 'Sam Second'

    def test_finalize_twice_rejected(self, finalized_count):
        with pytest.raises(InvalidStatusTransitionError):
            finalize_count(count_id=finalized_count.id, church_id='ORG1')

    def test_finalize_other_church_count_not_found(self, other_church_count):
        with pytest.raises(CountNotFoundError):
            finalize_count(count_id=other_church_count.id, church_id='ORG1')

        other_church_count.refresh_from_db()
        assert other_church_count.status == CountStatus.OPEN

    def test_list_finalized_counts_ordered_by_date(self, church, other_church):
        now = timezone.now()
        later = Count.objects.create(church=church, name='Later', status=CountStatus.FINALIZED, date=now)
        earlier = Count.objects.create(
            church=church, name='Earlier', status=CountStatus.FINALIZED, date=now - timedelta(days=7)
        )
        Count.objects.create(church=church, name='Still open')
        Count.objects.create(church=other_church, name='Elsewhere', status=CountStatus.FINALIZED)

        assert list(list_finalized_counts(church_id='ORG1')) == [earlier, later]

    def test_latest_finalized_count(self, church):
        now = timezone.now()
        Count.objects.create(church=church, name='Old', status=CountStatus.FINALIZED, date=now - timedelta(days=14))
        newest = Count.objects.create(church=church, name='New', status=CountStatus.FINALIZED, date=now)

        assert get_latest_finalized_count(church_id='ORG1') == newest

    def test_latest_finalized_count_none(self, open_count):
        with pytest.raises(CountNotFoundError):
            get_latest_finalized_count(church_id='ORG1')


@pytest.mark.django_db
class TestDonationManagement:
    """Tests for donation_management.py service functions."""

    def test_add_donation_updates_total(self, open_count, member):
        add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('25.00'),
                     donation_type=DonationType.CASH, member_id=member.id)
        add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('100.00'),
                     donation_type=DonationType.CHECK, check_number='1042')

        open_count.refresh_from_db()
        assert open_count.total_amount == Decimal('125.00')
        assert open_count.donations.count() == 2

    def test_add_donation_to_finalized_count_rejected(self, finalized_count):
        with pytest.raises(CountFinalizedError):
            add_donation(church_id='ORG1', count_id=finalized_count.id, amount=Decimal('5.00'),
                         donation_type=DonationType.CASH)

        assert finalized_count.donations.count() == 1

    def test_check_requires_check_number(self, open_count):
        with pytest.raises(InvalidDonationError):
            add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('5.00'),
                         donation_type=DonationType.CHECK)

    def test_amount_must_be_positive(self, open_count):
        with pytest.raises(InvalidDonationError):
            add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('0.00'),
                         donation_type=DonationType.CASH)

    def test_cash_donation_drops_check_number(self, open_count):
        donation = add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('5.00'),
                                donation_type=DonationType.CASH, check_number='77')

        assert donation.check_number == ''

    def test_member_from_other_church_rejected(self, open_count, outside_member):
        with pytest.raises(MemberNotFoundError):
            add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('5.00'),
                         donation_type=DonationType.CASH, member_id=outside_member.id)

        assert open_count.donations.count() == 0

    def test_add_donation_to_other_church_count_not_found(self, other_church_count):
        with pytest.raises(CountNotFoundError):
            add_donation(church_id='ORG1', count_id=other_church_count.id, amount=Decimal('5.00'),
                         donation_type=DonationType.CASH)

    def test_list_donations(self, finalized_count):
        donations = list_donations(count_id=finalized_count.id, church_id='ORG1')

        assert len(donations) == 1

    def test_remove_donation_updates_total(self, open_count):
        donation = add_donation(church_id='ORG1', count_id=open_count.id, amount=Decimal('30.00'),
                                donation_type=DonationType.CASH)

        remove_donation(donation_id=donation.id, church_id='ORG1')

        open_count.refresh_from_db()
        assert open_count.total_amount == Decimal('0.00')
        assert not Donation.objects.filter(id=donation.id).exists()

    def test_remove_donation_from_finalized_count_rejected(self, finalized_count):
        donation = finalized_count.donations.get()

        with pytest.raises(CountFinalizedError):
            remove_donation(donation_id=donation.id, church_id='ORG1')

        assert Donation.objects.filter(id=donation.id).exists()

    def test_remove_donation_other_church_not_found(self, finalized_count):
        donation = finalized_count.donations.get()

        with pytest.raises(DonationNotFoundError):
            remove_donation(donation_id=donation.id, church_id='ORG2')
