from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from parking_management.core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeInterval:
    """A time window starting at ``start``.

    ``end`` of None means the window is open-ended and runs until it is
    explicitly closed, so for overlap purposes it extends to infinity.
    Bounds compare inclusively: windows that share an endpoint overlap.
    """

    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end <= self.start:
            raise ValidationError('End time must be after start time')

    @property
    def is_open(self) -> bool:
        return self.end is None

    def overlaps(self, other: 'TimeInterval') -> bool:
        starts_before_other_ends = other.end is None or self.start <= other.end
        other_starts_before_end = self.end is None or other.start <= self.end
        return starts_before_other_ends and other_starts_before_end

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment and (self.end is None or moment <= self.end)
