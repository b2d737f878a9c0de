from rest_framework import serializers
from .models import Member


class MemberSerializer(serializers.ModelSerializer):
    """Main serializer for members."""

    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Member
        fields = [
            'id',
            'first_name',
            'last_name',
            'full_name',
            'email',
            'phone',
            'is_visitor',
            'notes',
            'external_id',
            'external_system',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'full_name', 'created_at', 'updated_at']


class MemberListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Member
        fields = ['id', 'first_name', 'last_name', 'full_name', 'email', 'is_visitor']
        read_only_fields = fields


class DeletionEligibilitySerializer(serializers.Serializer):
    """Output of the member deletion check."""

    canDelete = serializers.BooleanField()
    openCounts = serializers.ListField(child=serializers.CharField())


class MemberDeleteConflictSerializer(serializers.Serializer):
    error = serializers.CharField()
    openCounts = serializers.ListField(child=serializers.CharField())


class MemberErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
