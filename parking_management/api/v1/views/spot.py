from django.utils import timezone
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.request import Request

from parking_management.api.responses import envelope
from parking_management.api.v1.serializers import AvailabilityQuerySerializer, SpotSerializer
from parking_management.core.booking.availability import available_spots, spot_statuses
from parking_management.core.exceptions import NotFound
from parking_management.core.models import Park, Spot


class SpotViewSet(viewsets.GenericViewSet):

    serializer_class = SpotSerializer
    lookup_value_regex = r'\d+'

    def _spots_response(self, spots: list[Spot]):
        context = self.get_serializer_context()
        context['statuses'] = spot_statuses(spots, timezone.now())
        data = SpotSerializer(spots, many=True, context=context).data
        return envelope(data, count=len(data))

    def retrieve(self, request: Request, pk=None):
        spot = Spot.objects.filter(pk=pk).first()
        if spot is None:
            raise NotFound('Spot not found')
        context = self.get_serializer_context()
        context['statuses'] = spot_statuses([spot], timezone.now())
        return envelope(SpotSerializer(spot, context=context).data)

    @action(detail=False, url_path=r'park/(?P<park_id>\d+)')
    def by_park(self, request: Request, park_id=None):
        if not Park.objects.filter(pk=park_id).exists():
            raise NotFound('Park not found')
        return self._spots_response(list(Spot.objects.filter(park_id=park_id)))

    @action(detail=False, url_path=r'park/(?P<park_id>\d+)/available')
    def available(self, request: Request, park_id=None):
        serializer = AvailabilityQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return self._spots_response(available_spots(int(park_id), serializer.validated_data['interval']))
