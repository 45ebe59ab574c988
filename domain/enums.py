"""Domain Enums"""
from enum import Enum


class RoomType(str, Enum):
    SIMPLE = "SIMPLE"
    DOUBLE = "DOUBLE"
    SUITE = "SUITE"

    @property
    def capacity(self) -> int:
        """Maximum number of occupants"""
        return _ROOM_CAPACITY[self]


_ROOM_CAPACITY = {
    RoomType.SIMPLE: 1,
    RoomType.DOUBLE: 2,
    RoomType.SUITE: 3,
}


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    CLEANING = "CLEANING"


class ReservationStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"
