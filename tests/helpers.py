from datetime import datetime, timedelta, timezone
from decimal import Decimal

from parking_management.core.models import (
    Park,
    ParkingRequest,
    ParkStatus,
    RequestStatus,
    Role,
    User,
)
from parking_management.core.parks.inventory import generate_spots
from parking_management.core.policy import Actor

T0 = datetime(2030, 1, 1, 10, 0, tzinfo=timezone.utc)
PASSWORD = 'secret-password'


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def make_user(email: str, role: str = Role.USER) -> User:
    return User.objects.create_user(email=email, password=PASSWORD, firstname='Test', lastname=role.title(), role=role)


def actor(user: User) -> Actor:
    return Actor.from_user(user)


def make_park(owner: User, total_spots: int = 3, hourly_rate: str = '10.00', approved: bool = True) -> Park:
    park = Park.objects.create(
        owner=owner,
        name='Central Park',
        address='1 Main Street',
        total_spots=total_spots,
        hourly_rate=Decimal(hourly_rate),
    )
    if approved:
        park.status = ParkStatus.APPROVED
        park.save()
        generate_spots(park)
    return park


def make_request(user: User, park: Park, spot, start: datetime, end=None,
                 status: str = RequestStatus.PENDING) -> ParkingRequest:
    return ParkingRequest.objects.create(
        user=user,
        park=park,
        spot=spot,
        start_time=start,
        end_time=end,
        status=status,
    )
