from decimal import Decimal

from rest_framework import serializers
from .models import Count, Donation, DonationType


class DonationSerializer(serializers.ModelSerializer):
    """Serializer for donations."""

    member_name = serializers.SerializerMethodField()

    class Meta:
        model = Donation
        fields = [
            'id',
            'count',
            'member',
            'member_name',
            'date',
            'amount',
            'donation_type',
            'check_number',
            'notes',
            'notification_status',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_name(self, obj):
        return obj.member.full_name if obj.member else None


class DonationCreateSerializer(serializers.Serializer):
    """Input serializer for recording a donation."""

    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    donation_type = serializers.ChoiceField(choices=DonationType.choices)
    member = serializers.IntegerField(required=False, allow_null=True)
    check_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        if attrs['donation_type'] == DonationType.CHECK and not attrs.get('check_number'):
            raise serializers.ValidationError({
                'check_number': 'Check donations require a check number'
            })
        return attrs


class CountSerializer(serializers.ModelSerializer):
    """Main serializer for counts."""

    donation_count = serializers.SerializerMethodField()

    class Meta:
        model = Count
        fields = [
            'id',
            'name',
            'date',
            'status',
            'service',
            'total_amount',
            'notes',
            'donation_count',
            'primary_attestor_name',
            'secondary_attestor_name',
            'finalized_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_donation_count(self, obj):
        return obj.donations.count()


class CountCreateSerializer(serializers.Serializer):
    """Input serializer for opening a count."""

    name = serializers.CharField(max_length=200)
    date = serializers.DateTimeField(required=False)
    service = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class FinalizeCountSerializer(serializers.Serializer):
    """Input serializer for finalizing a count."""

    primary_attestor_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    secondary_attestor_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class ReceiptSummarySerializer(serializers.Serializer):
    sent = serializers.IntegerField()
    failed = serializers.IntegerField()
    not_required = serializers.IntegerField()
