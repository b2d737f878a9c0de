from rest_framework import serializers
from .models import Church


class ChurchSerializer(serializers.ModelSerializer):
    """Read-only church profile."""

    class Meta:
        model = Church
        fields = [
            'id',
            'name',
            'status',
            'contact_email',
            'phone',
            'address',
            'city',
            'state',
            'zip_code',
            'denomination',
            'created_at',
        ]
        read_only_fields = fields
