import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from parking_management.core import policy
from parking_management.core.booking.availability import is_available, spot_lock
from parking_management.core.booking.billing import calculate_amount
from parking_management.core.booking.intervals import TimeInterval
from parking_management.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFound,
    ValidationError,
)
from parking_management.core.models import (
    Park,
    ParkingRequest,
    ParkStatus,
    RequestStatus,
    Spot,
)
from parking_management.core.policy import Actor

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('start_time', 'end_time', 'plate_number')


def _build_interval(start_time: Optional[datetime], end_time: Optional[datetime]) -> TimeInterval:
    if start_time is None:
        if end_time is not None:
            raise ValidationError('Start time is required when end time is given')
        raise ValidationError('Start time is required')
    return TimeInterval(start_time, end_time)


def _quote(park: Park, interval: TimeInterval) -> Decimal:
    if interval.is_open:
        return Decimal('0.00')
    return calculate_amount(park.hourly_rate, interval.start, interval.end)


def _ensure_pending(request: ParkingRequest, action: str) -> None:
    if request.status != RequestStatus.PENDING:
        raise InvalidStateError(f'Cannot {action} a request that is already {request.status.lower()}')


def _get_request(request_id: int) -> ParkingRequest:
    try:
        return ParkingRequest.objects.select_related('park').get(pk=request_id)
    except ParkingRequest.DoesNotExist:
        raise NotFound('Request not found')


def _lock_request(request_id: int) -> ParkingRequest:
    try:
        request = ParkingRequest.objects.select_for_update().get(pk=request_id)
    except ParkingRequest.DoesNotExist:
        raise NotFound('Request not found')
    request.park = Park.objects.get(pk=request.park_id)
    return request


def requests_with_relations() -> QuerySet:
    return ParkingRequest.objects.select_related('user', 'park', 'spot')


def create_request(
    actor: Actor,
    park_id: int,
    spot_id: int,
    start_time: Optional[datetime],
    end_time: Optional[datetime] = None,
    plate_number: str = '',
) -> ParkingRequest:
    interval = _build_interval(start_time, end_time)

    park = Park.objects.filter(pk=park_id, status=ParkStatus.APPROVED).first()
    if park is None:
        raise NotFound('Park not found or not approved')
    if not Spot.objects.filter(pk=spot_id, park_id=park_id).exists():
        raise NotFound('Spot not found or does not belong to the specified park')

    with spot_lock(spot_id):
        if not is_available(spot_id, interval):
            raise ConflictError('Spot is not available for the requested time')
        request = ParkingRequest.objects.create(
            user_id=actor.id,
            park=park,
            spot_id=spot_id,
            start_time=interval.start,
            end_time=interval.end,
            plate_number=plate_number or '',
            total_amount=_quote(park, interval),
        )

    logger.info('Parking request %s created by user %s for spot %s', request.id, actor.id, spot_id)
    return request


def update_request(actor: Actor, request_id: int, changes: dict[str, Any]) -> ParkingRequest:
    request = _get_request(request_id)
    policy.ensure_can_update_request(actor, request.user_id)

    with spot_lock(request.spot_id):
        request = _lock_request(request_id)
        _ensure_pending(request, 'update')

        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(request, field, changes[field])
        interval = _build_interval(request.start_time, request.end_time)
        if not is_available(request.spot_id, interval, exclude_request_id=request.id):
            raise ConflictError('Spot is not available for the requested time')
        request.total_amount = _quote(request.park, interval)
        request.save()

    return request


def approve_request(actor: Actor, request_id: int) -> ParkingRequest:
    request = _get_request(request_id)
    policy.ensure_can_decide_request(actor, request.park.owner_id)

    with spot_lock(request.spot_id):
        request = _lock_request(request_id)
        _ensure_pending(request, 'approve')

        interval = TimeInterval(request.start_time, request.end_time)
        if not is_available(request.spot_id, interval, exclude_request_id=request.id):
            logger.warning('Approval of request %s conflicts on spot %s', request.id, request.spot_id)
            raise ConflictError('Spot is no longer available for the requested time')

        request.total_amount = _quote(request.park, interval)
        request.status = RequestStatus.APPROVED
        request.save(update_fields=['status', 'total_amount', 'updated_at'])

    logger.info('Parking request %s approved, amount %s', request.id, request.total_amount)
    return request


def reject_request(actor: Actor, request_id: int) -> ParkingRequest:
    request = _get_request(request_id)
    policy.ensure_can_decide_request(actor, request.park.owner_id)

    with transaction.atomic():
        request = _lock_request(request_id)
        _ensure_pending(request, 'reject')
        request.status = RequestStatus.REJECTED
        request.save(update_fields=['status', 'updated_at'])

    logger.info('Parking request %s rejected', request.id)
    return request


def cancel_request(actor: Actor, request_id: int) -> ParkingRequest:
    request = _get_request(request_id)
    policy.ensure_can_cancel_request(actor, request.user_id)

    with transaction.atomic():
        request = _lock_request(request_id)
        _ensure_pending(request, 'cancel')
        request.status = RequestStatus.CANCELLED
        request.save(update_fields=['status', 'updated_at'])

    logger.info('Parking request %s cancelled by user %s', request.id, actor.id)
    return request


def exit_request(actor: Actor, request_id: int, now: Optional[datetime] = None) -> ParkingRequest:
    """Close an ongoing session at ``now`` and bill the time spent."""
    request = _get_request(request_id)
    policy.ensure_can_exit_request(actor, request.user_id, request.park.owner_id)

    with transaction.atomic():
        request = _lock_request(request_id)
        if request.end_time is not None:
            raise InvalidStateError('Request has already exited')
        if request.status != RequestStatus.APPROVED:
            raise InvalidStateError(f'Cannot exit a request that is {request.status.lower()}')

        now = now or timezone.now()
        if now <= request.start_time:
            raise ValidationError('Exit time must be after start time')

        request.end_time = now
        request.total_amount = calculate_amount(request.park.hourly_rate, request.start_time, now)
        request.status = RequestStatus.COMPLETED
        request.save(update_fields=['end_time', 'total_amount', 'status', 'updated_at'])

    logger.info('Parking request %s exited, billed %s', request.id, request.total_amount)
    return request


def get_request(actor: Actor, request_id: int) -> ParkingRequest:
    try:
        request = requests_with_relations().get(pk=request_id)
    except ParkingRequest.DoesNotExist:
        raise NotFound('Request not found')
    policy.ensure_can_read_request(actor, request.user_id, request.park.owner_id)
    return request


def user_requests(actor: Actor) -> QuerySet:
    return requests_with_relations().filter(user_id=actor.id)


def owner_requests(actor: Actor) -> QuerySet:
    return requests_with_relations().filter(park__owner_id=actor.id)
