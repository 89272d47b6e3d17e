import logging

from django.db import transaction

from parking_management.core import policy
from parking_management.core.exceptions import InvalidStateError, NotFound
from parking_management.core.models import Park, ParkStatus, Spot
from parking_management.core.policy import Actor

logger = logging.getLogger(__name__)


def spot_number(index: int) -> str:
    return f'S-{index:03d}'


def generate_spots(park: Park) -> list[Spot]:
    """Create the park's spot inventory once; later calls return nothing."""
    if park.spots_generated:
        return []

    spots = Spot.objects.bulk_create(
        Spot(park=park, spot_number=spot_number(index))
        for index in range(1, park.total_spots + 1)
    )
    park.spots_generated = True
    park.save(update_fields=['spots_generated', 'updated_at'])

    logger.info('Generated %d spots for park %s', len(spots), park.id)
    return spots


def decide_park(actor: Actor, park_id: int, approved: bool) -> Park:
    policy.ensure_can_approve_park(actor)
    target = ParkStatus.APPROVED if approved else ParkStatus.REJECTED

    with transaction.atomic():
        try:
            park = Park.objects.select_for_update().get(pk=park_id)
        except Park.DoesNotExist:
            raise NotFound('Park not found')

        if park.status == target:
            return park
        if park.status != ParkStatus.PENDING:
            raise InvalidStateError(f'Park is already {park.status.lower()}')

        park.status = target
        park.save(update_fields=['status', 'updated_at'])
        if approved:
            generate_spots(park)

    logger.info('Park %s %s by admin %s', park.id, target.lower(), actor.id)
    return park
