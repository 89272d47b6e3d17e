import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from django.db import OperationalError, transaction

from parking_management.core.booking.intervals import TimeInterval
from parking_management.core.exceptions import ConflictError, NotFound
from parking_management.core.models import Park, ParkingRequest, RequestStatus, Spot

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_spot_locks: dict[int, threading.Lock] = defaultdict(threading.Lock)


@contextmanager
def spot_lock(spot_id: int) -> Iterator[Spot]:
    """Serialize check-then-write work on one spot.

    The process-local mutex covers threads sharing a database connection
    pool; ``select_for_update`` covers other processes on backends with row
    locks, and SQLite runs immediate transactions (see settings). The
    transaction commits before the mutex is released. A lock wait that times
    out surfaces as a retryable conflict.
    """
    with _registry_lock:
        lock = _spot_locks[spot_id]
    try:
        with lock, transaction.atomic():
            try:
                spot = Spot.objects.select_for_update().get(pk=spot_id)
            except Spot.DoesNotExist:
                raise NotFound('Spot not found')
            yield spot
    except OperationalError as e:
        if 'locked' not in str(e):
            raise
        logger.warning('Lock wait on spot %s timed out: %s', spot_id, e)
        raise ConflictError('Spot is busy, please try again')


def approved_intervals(spot_id: int, exclude_request_id: Optional[int] = None) -> list[TimeInterval]:
    queryset = ParkingRequest.objects.filter(spot_id=spot_id, status=RequestStatus.APPROVED)
    if exclude_request_id is not None:
        queryset = queryset.exclude(pk=exclude_request_id)
    return [TimeInterval(start, end) for start, end in queryset.values_list('start_time', 'end_time')]


def is_available(spot_id: int, interval: TimeInterval, exclude_request_id: Optional[int] = None) -> bool:
    if not Spot.objects.filter(pk=spot_id).exists():
        raise NotFound('Spot not found')
    return not any(
        interval.overlaps(other)
        for other in approved_intervals(spot_id, exclude_request_id)
    )


def available_spots(park_id: int, interval: TimeInterval) -> list[Spot]:
    if not Park.objects.filter(pk=park_id).exists():
        raise NotFound('Park not found')

    occupied_spot_ids = set()
    approved = ParkingRequest.objects.filter(
        park_id=park_id,
        status=RequestStatus.APPROVED,
    ).values_list('spot_id', 'start_time', 'end_time')
    for spot_id, start, end in approved:
        if interval.overlaps(TimeInterval(start, end)):
            occupied_spot_ids.add(spot_id)

    return [spot for spot in Spot.objects.filter(park_id=park_id) if spot.id not in occupied_spot_ids]


def spot_statuses(spots: list[Spot], moment: datetime) -> dict[int, str]:
    """Derive AVAILABLE, RESERVED or OCCUPIED for each spot at ``moment``."""
    statuses = {spot.id: 'AVAILABLE' for spot in spots}
    approved = ParkingRequest.objects.filter(
        spot_id__in=list(statuses),
        status=RequestStatus.APPROVED,
        start_time__lte=moment,
    ).values_list('spot_id', 'start_time', 'end_time')
    for spot_id, start, end in approved:
        interval = TimeInterval(start, end)
        if not interval.contains(moment):
            continue
        statuses[spot_id] = 'OCCUPIED' if interval.is_open else 'RESERVED'
    return statuses
