from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request

from parking_management.api.responses import envelope
from parking_management.api.v1.permissions import role_required
from parking_management.api.v1.serializers import (
    ParkingRequestCreateSerializer,
    ParkingRequestSerializer,
    ParkingRequestUpdateSerializer,
    RequestStatusSerializer,
)
from parking_management.core.booking import lifecycle
from parking_management.core.models import RequestStatus, Role
from parking_management.core.policy import Actor


class ParkingRequestViewSet(viewsets.GenericViewSet):

    serializer_class = ParkingRequestSerializer
    lookup_value_regex = r'\d+'

    def _detail_response(self, request_id: int, message: str = None, status_code: int = status.HTTP_200_OK):
        parking_request = lifecycle.requests_with_relations().get(pk=request_id)
        return envelope(ParkingRequestSerializer(parking_request).data, message=message, status=status_code)

    def create(self, request: Request):
        serializer = ParkingRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        parking_request = lifecycle.create_request(
            Actor.from_user(request.user),
            park_id=data['parkId'],
            spot_id=data['spotId'],
            start_time=data.get('startTime'),
            end_time=data.get('endTime'),
            plate_number=data.get('plateNumber', ''),
        )
        return self._detail_response(
            parking_request.id,
            message='Parking request created successfully and pending approval',
            status_code=status.HTTP_201_CREATED,
        )

    def list(self, request: Request):
        data = ParkingRequestSerializer(lifecycle.user_requests(Actor.from_user(request.user)), many=True).data
        return envelope(data, count=len(data))

    def retrieve(self, request: Request, pk=None):
        parking_request = lifecycle.get_request(Actor.from_user(request.user), pk)
        return envelope(ParkingRequestSerializer(parking_request).data)

    def partial_update(self, request: Request, pk=None):
        serializer = ParkingRequestUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        parking_request = lifecycle.update_request(Actor.from_user(request.user), pk, serializer.validated_data)
        return self._detail_response(parking_request.id, message='Request updated successfully')

    @action(detail=True, methods=['patch'], url_path='status')
    def set_status(self, request: Request, pk=None):
        serializer = RequestStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        actor = Actor.from_user(request.user)

        if serializer.validated_data['status'] == RequestStatus.APPROVED:
            parking_request = lifecycle.approve_request(actor, pk)
            message = 'Request approved successfully'
        else:
            parking_request = lifecycle.reject_request(actor, pk)
            message = 'Request rejected successfully'
        return self._detail_response(parking_request.id, message=message)

    @action(detail=True, methods=['patch'])
    def cancel(self, request: Request, pk=None):
        parking_request = lifecycle.cancel_request(Actor.from_user(request.user), pk)
        return self._detail_response(parking_request.id, message='Request canceled successfully')

    @action(detail=True, methods=['patch'], url_path='exit')
    def exit_parking(self, request: Request, pk=None):
        parking_request = lifecycle.exit_request(Actor.from_user(request.user), pk)
        return self._detail_response(parking_request.id, message='Car exit processed successfully')


class OwnerParkingRequestViewSet(viewsets.GenericViewSet):

    serializer_class = ParkingRequestSerializer

    def get_permissions(self):
        return [IsAuthenticated(), role_required(Role.OWNER)()]

    def list(self, request: Request):
        data = ParkingRequestSerializer(lifecycle.owner_requests(Actor.from_user(request.user)), many=True).data
        return envelope(data, count=len(data))
