from rest_framework import serializers

from parking_management.api.v1.serializers.user import UserSummarySerializer
from parking_management.core.models import Park, ParkingRequest, RequestStatus, Spot


class RequestParkSerializer(serializers.ModelSerializer):

    hourlyRate = serializers.DecimalField(source='hourly_rate', max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Park
        fields = ('id', 'name', 'address', 'hourlyRate',)


class RequestSpotSerializer(serializers.ModelSerializer):

    spotNumber = serializers.CharField(source='spot_number', read_only=True)

    class Meta:
        model = Spot
        fields = ('id', 'spotNumber',)


class ParkingRequestSerializer(serializers.ModelSerializer):

    userId = serializers.IntegerField(source='user_id', read_only=True)
    parkId = serializers.IntegerField(source='park_id', read_only=True)
    spotId = serializers.IntegerField(source='spot_id', read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    totalAmount = serializers.DecimalField(source='total_amount', max_digits=12, decimal_places=2, read_only=True)
    plateNumber = serializers.CharField(source='plate_number', read_only=True)
    user = UserSummarySerializer(read_only=True)
    park = RequestParkSerializer(read_only=True)
    spot = RequestSpotSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = ParkingRequest
        fields = (
            'id', 'userId', 'parkId', 'spotId', 'startTime', 'endTime', 'status',
            'totalAmount', 'plateNumber', 'user', 'park', 'spot', 'createdAt', 'updatedAt',
        )
        read_only_fields = ('status',)


class ParkingRequestCreateSerializer(serializers.Serializer):

    parkId = serializers.IntegerField(error_messages={
        'required': 'Park ID is required',
        'null': 'Park ID is required',
    })
    spotId = serializers.IntegerField(error_messages={
        'required': 'Spot ID is required',
        'null': 'Spot ID is required',
    })
    # Presence of startTime is checked when the interval is built, so that an
    # endTime without a startTime is reported as such.
    startTime = serializers.DateTimeField(required=False, allow_null=True, error_messages={
        'invalid': 'Invalid date format',
    })
    endTime = serializers.DateTimeField(required=False, allow_null=True, error_messages={
        'invalid': 'Invalid date format',
    })
    plateNumber = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')


class ParkingRequestUpdateSerializer(serializers.Serializer):

    startTime = serializers.DateTimeField(source='start_time', required=False, error_messages={
        'invalid': 'Invalid date format',
    })
    endTime = serializers.DateTimeField(source='end_time', required=False, allow_null=True, error_messages={
        'invalid': 'Invalid date format',
    })
    plateNumber = serializers.CharField(source='plate_number', required=False, allow_blank=True, max_length=20)


class RequestStatusSerializer(serializers.Serializer):

    status = serializers.ChoiceField(choices=(RequestStatus.APPROVED, RequestStatus.REJECTED), error_messages={
        'required': 'Status must be either APPROVED or REJECTED',
        'invalid_choice': 'Status must be either APPROVED or REJECTED',
    })
