"""In-Memory Repository Implementations"""
from itertools import count
from typing import Optional, List, Dict

from domain.repositories import GuestRepository, RoomRepository, ReservationRepository, BillRepository
from domain.entities import Guest, Room, Reservation, Bill
from domain.enums import ReservationStatus
from domain.value_objects import DateRange


class IdentifierAllocator:
    """Issues monotonically increasing integer ids, starting at 1"""

    def __init__(self, start: int = 1):
        self._counter = count(start)

    def next_id(self) -> int:
        return next(self._counter)


class InMemoryGuestRepository(GuestRepository):
    """In-memory implementation of GuestRepository"""

    def __init__(self):
        self._storage: Dict[int, Guest] = {}
        self._ids = IdentifierAllocator()

    async def save(self, guest: Guest) -> Guest:
        """Save guest to memory under a fresh id"""
        guest.guest_id = self._ids.next_id()
        self._storage[guest.guest_id] = guest
        return guest

    async def find_by_id(self, guest_id: int) -> Optional[Guest]:
        return self._storage.get(guest_id)

    async def find_all(self) -> List[Guest]:
        return list(self._storage.values())

    async def update(self, guest: Guest) -> Optional[Guest]:
        if guest.guest_id in self._storage:
            self._storage[guest.guest_id] = guest
            return guest
        return None

    async def delete(self, guest_id: int) -> bool:
        return self._storage.pop(guest_id, None) is not None


class InMemoryRoomRepository(RoomRepository):
    """In-memory implementation of RoomRepository"""

    def __init__(self):
        self._storage: Dict[int, Room] = {}

    async def save(self, room: Room) -> Room:
        self._storage[room.room_number] = room
        return room

    async def find_by_number(self, room_number: int) -> Optional[Room]:
        return self._storage.get(room_number)

    async def find_all(self) -> List[Room]:
        return list(self._storage.values())

    async def update(self, room: Room) -> Optional[Room]:
        if room.room_number in self._storage:
            self._storage[room.room_number] = room
            return room
        return None

    async def delete(self, room_number: int) -> bool:
        return self._storage.pop(room_number, None) is not None


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    def __init__(self):
        self._storage: Dict[int, Reservation] = {}
        self._ids = IdentifierAllocator()

    async def save(self, reservation: Reservation) -> Reservation:
        """Save reservation to memory under a fresh id"""
        reservation.reservation_id = self._ids.next_id()
        self._storage[reservation.reservation_id] = reservation
        return reservation

    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self._storage.get(reservation_id)

    async def find_all(self) -> List[Reservation]:
        return list(self._storage.values())

    async def find_by_guest_id(self, guest_id: int) -> List[Reservation]:
        return [r for r in self._storage.values() if r.guest_id == guest_id]

    async def find_by_room_number(self, room_number: int) -> List[Reservation]:
        return [r for r in self._storage.values() if r.room_number == room_number]

    async def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return [r for r in self._storage.values() if r.status == status]

    async def find_overlapping(self, date_range: DateRange, inclusive: bool = True) -> List[Reservation]:
        return [r for r in self._storage.values() if r.overlaps(date_range, inclusive)]

    async def find_active_overlapping(
        self,
        room_number: int,
        date_range: DateRange,
        inclusive: bool = True,
        exclude_id: Optional[int] = None
    ) -> List[Reservation]:
        """Linear scan over every reservation in the store"""
        return [
            r for r in self._storage.values()
            if r.room_number == room_number
            and r.is_active()
            and r.reservation_id != exclude_id
            and r.overlaps(date_range, inclusive)
        ]

    async def update(self, reservation: Reservation) -> Optional[Reservation]:
        if reservation.reservation_id in self._storage:
            self._storage[reservation.reservation_id] = reservation
            return reservation
        return None


class InMemoryBillRepository(BillRepository):
    """In-memory implementation of BillRepository"""

    def __init__(self):
        self._storage: Dict[int, Bill] = {}
        self._ids = IdentifierAllocator()

    async def save(self, bill: Bill) -> Bill:
        bill.bill_id = self._ids.next_id()
        self._storage[bill.bill_id] = bill
        return bill

    async def find_by_id(self, bill_id: int) -> Optional[Bill]:
        return self._storage.get(bill_id)

    async def find_by_reservation_id(self, reservation_id: int) -> Optional[Bill]:
        for bill in self._storage.values():
            if bill.reservation_id == reservation_id:
                return bill
        return None

    async def find_all(self) -> List[Bill]:
        return list(self._storage.values())

    async def find_by_paid_status(self, paid: bool) -> List[Bill]:
        return [b for b in self._storage.values() if b.paid == paid]

    async def update(self, bill: Bill) -> Optional[Bill]:
        if bill.bill_id in self._storage:
            self._storage[bill.bill_id] = bill
            return bill
        return None
