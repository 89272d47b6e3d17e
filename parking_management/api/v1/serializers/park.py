from rest_framework import serializers

from parking_management.api.v1.serializers.spot import SpotSerializer
from parking_management.api.v1.serializers.user import UserSummarySerializer
from parking_management.core.models import Park


class ParkSerializer(serializers.ModelSerializer):

    totalSpots = serializers.IntegerField(source='total_spots', min_value=1, error_messages={
        'required': 'Total spots must be at least 1',
        'invalid': 'Total spots must be at least 1',
        'min_value': 'Total spots must be at least 1',
    })
    hourlyRate = serializers.DecimalField(source='hourly_rate', max_digits=10, decimal_places=2, min_value=0, error_messages={
        'required': 'Hourly rate must be a positive number',
        'invalid': 'Hourly rate must be a positive number',
        'min_value': 'Hourly rate must be a positive number',
    })
    image = serializers.ImageField(required=False, allow_null=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True)
    owner = UserSummarySerializer(read_only=True)
    spotsGenerated = serializers.BooleanField(source='spots_generated', read_only=True)
    spotCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Park
        fields = (
            'id', 'name', 'address', 'description', 'image', 'totalSpots', 'hourlyRate',
            'status', 'spotsGenerated', 'ownerId', 'owner', 'spotCount', 'createdAt', 'updatedAt',
        )
        read_only_fields = ('status',)
        extra_kwargs = {
            'name': {'error_messages': {
                'required': 'Park name is required',
                'blank': 'Park name cannot be empty',
            }},
            'address': {'error_messages': {
                'required': 'Address is required',
                'blank': 'Address cannot be empty',
            }},
            'description': {'required': False},
        }

    def get_spotCount(self, obj: Park) -> int:
        spot_count = getattr(obj, 'spot_count', None)
        if spot_count is None:
            spot_count = obj.spots.count()
        return spot_count


class ParkDetailSerializer(ParkSerializer):

    spots = SpotSerializer(many=True, read_only=True)

    class Meta(ParkSerializer.Meta):
        fields = ParkSerializer.Meta.fields + ('spots',)


class ParkApprovalSerializer(serializers.Serializer):

    isApproved = serializers.BooleanField(error_messages={
        'required': 'isApproved field is required',
        'invalid': 'isApproved must be a boolean',
    })
