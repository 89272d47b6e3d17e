import logging

from django.db.models import Count, QuerySet

from parking_management.core import policy
from parking_management.core.exceptions import NotFound, ValidationError
from parking_management.core.models import Park, ParkStatus
from parking_management.core.policy import Actor

logger = logging.getLogger(__name__)


def parks_with_relations() -> QuerySet:
    return Park.objects.select_related('owner').annotate(spot_count=Count('spots'))


def get_park(park_id: int) -> Park:
    try:
        return parks_with_relations().get(pk=park_id)
    except Park.DoesNotExist:
        raise NotFound('Park not found')


def approved_parks() -> QuerySet:
    return parks_with_relations().filter(status=ParkStatus.APPROVED)


def owner_parks(actor: Actor) -> QuerySet:
    return parks_with_relations().filter(owner_id=actor.id)


def pending_parks() -> QuerySet:
    return parks_with_relations().filter(status=ParkStatus.PENDING)


def create_park(actor: Actor, data: dict) -> Park:
    park = Park.objects.create(owner_id=actor.id, **data)
    logger.info('Park %s created by owner %s, pending approval', park.id, actor.id)
    return park


def update_park(actor: Actor, park: Park, changes: dict) -> Park:
    policy.ensure_can_mutate_park(actor, park.owner_id)

    total_spots = changes.get('total_spots')
    if park.spots_generated and total_spots is not None and total_spots != park.total_spots:
        raise ValidationError('Total spots cannot change after spots were generated')

    old_image = park.image.name if park.image else None
    for field, value in changes.items():
        setattr(park, field, value)
    park.save()

    if old_image and 'image' in changes and park.image.name != old_image:
        park.image.storage.delete(old_image)
    return park


def delete_park(actor: Actor, park: Park) -> None:
    policy.ensure_can_mutate_park(actor, park.owner_id)

    park_id = park.id
    if park.image:
        park.image.delete(save=False)
    park.delete()
    logger.info('Park %s deleted by user %s', park_id, actor.id)
