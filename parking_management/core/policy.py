from dataclasses import dataclass

from parking_management.core.exceptions import PermissionDenied
from parking_management.core.models import Role


@dataclass(frozen=True)
class Actor:
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> 'Actor':
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def ensure_can_mutate_park(actor: Actor, owner_id: int) -> None:
    if actor.id != owner_id and not actor.is_admin:
        raise PermissionDenied('Not authorized to modify this park')


def ensure_can_approve_park(actor: Actor) -> None:
    if not actor.is_admin:
        raise PermissionDenied(f'Role {actor.role} is not authorized to approve parks')


def ensure_can_read_request(actor: Actor, requester_id: int, park_owner_id: int) -> None:
    if actor.id not in (requester_id, park_owner_id) and not actor.is_admin:
        raise PermissionDenied('Not authorized to access this request')


def ensure_can_decide_request(actor: Actor, park_owner_id: int) -> None:
    if actor.id != park_owner_id:
        raise PermissionDenied('Not authorized to update this request')


def ensure_can_cancel_request(actor: Actor, requester_id: int) -> None:
    if actor.id != requester_id:
        raise PermissionDenied('Not authorized to cancel this request')


def ensure_can_update_request(actor: Actor, requester_id: int) -> None:
    if actor.id != requester_id:
        raise PermissionDenied('Not authorized to update this request')


def ensure_can_exit_request(actor: Actor, requester_id: int, park_owner_id: int) -> None:
    if actor.id not in (requester_id, park_owner_id) and not actor.is_admin:
        raise PermissionDenied('Not authorized to process exit for this request')
