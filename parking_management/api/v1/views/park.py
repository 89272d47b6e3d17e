from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request

from parking_management.api.responses import envelope
from parking_management.api.v1.permissions import role_required
from parking_management.api.v1.serializers import (
    ParkApprovalSerializer,
    ParkDetailSerializer,
    ParkSerializer,
)
from parking_management.core.booking.availability import spot_statuses
from parking_management.core.models import Role
from parking_management.core.parks import inventory, logic
from parking_management.core.policy import Actor


class ParkViewSet(viewsets.GenericViewSet):

    serializer_class = ParkSerializer
    lookup_value_regex = r'\d+'

    role_permissions = {
        'create': role_required(Role.OWNER),
        'my_parks': role_required(Role.OWNER),
        'pending': role_required(Role.ADMIN),
        'approve': role_required(Role.ADMIN),
    }

    def get_permissions(self):
        permissions = [IsAuthenticated()]
        if self.action in self.role_permissions:
            permissions.append(self.role_permissions[self.action]())
        return permissions

    def get_queryset(self):
        return logic.approved_parks()

    def _list_response(self, queryset):
        data = ParkSerializer(queryset, many=True, context=self.get_serializer_context()).data
        return envelope(data, count=len(data))

    def create(self, request: Request):
        serializer = ParkSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        park = logic.create_park(Actor.from_user(request.user), serializer.validated_data)
        return envelope(
            ParkSerializer(park, context=self.get_serializer_context()).data,
            message='Park created successfully and pending approval from admin',
            status=status.HTTP_201_CREATED,
        )

    def list(self, request: Request):
        return self._list_response(self.get_queryset())

    @action(detail=False, url_path='my-parks')
    def my_parks(self, request: Request):
        return self._list_response(logic.owner_parks(Actor.from_user(request.user)))

    @action(detail=False)
    def pending(self, request: Request):
        return self._list_response(logic.pending_parks())

    def retrieve(self, request: Request, pk=None):
        park = logic.get_park(pk)
        spots = list(park.spots.all())
        context = self.get_serializer_context()
        context['statuses'] = spot_statuses(spots, timezone.now())
        return envelope(ParkDetailSerializer(park, context=context).data)

    def update(self, request: Request, pk=None, partial=False):
        park = logic.get_park(pk)
        serializer = ParkSerializer(park, data=request.data, partial=partial, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        park = logic.update_park(Actor.from_user(request.user), park, serializer.validated_data)
        return envelope(
            ParkSerializer(park, context=self.get_serializer_context()).data,
            message='Park updated successfully',
        )

    def partial_update(self, request: Request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request: Request, pk=None):
        park = logic.get_park(pk)
        logic.delete_park(Actor.from_user(request.user), park)
        return envelope({'message': 'Park deleted successfully'})

    @action(detail=True, methods=['patch'])
    def approve(self, request: Request, pk=None):
        serializer = ParkApprovalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        is_approved = serializer.validated_data['isApproved']

        park = inventory.decide_park(Actor.from_user(request.user), pk, is_approved)
        message = 'Park approved successfully' if is_approved else 'Park rejected successfully'
        return envelope(
            ParkSerializer(logic.get_park(park.id), context=self.get_serializer_context()).data,
            message=message,
        )
