from rest_framework import serializers

from parking_management.core.booking.intervals import TimeInterval
from parking_management.core.models import Spot


class SpotSerializer(serializers.ModelSerializer):
    """Spot with its status derived from approved requests.

    Views pass the precomputed ``statuses`` mapping in the context.
    """

    spotNumber = serializers.CharField(source='spot_number', read_only=True)
    parkId = serializers.IntegerField(source='park_id', read_only=True)
    status = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Spot
        fields = ('id', 'spotNumber', 'parkId', 'status', 'createdAt',)

    def get_status(self, obj: Spot):
        return self.context.get('statuses', {}).get(obj.id)


class AvailabilityQuerySerializer(serializers.Serializer):

    startTime = serializers.DateTimeField(error_messages={
        'required': 'Start time is required',
        'invalid': 'Invalid date format',
    })
    endTime = serializers.DateTimeField(required=False, allow_null=True, error_messages={
        'invalid': 'Invalid date format',
    })

    def validate(self, attrs):
        attrs['interval'] = TimeInterval(attrs['startTime'], attrs.get('endTime'))
        return attrs
