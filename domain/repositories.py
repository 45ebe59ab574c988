"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List

from domain.entities import Guest, Room, Reservation, Bill
from domain.enums import ReservationStatus
from domain.value_objects import DateRange


class GuestRepository(ABC):
    """Repository interface for Guest"""

    @abstractmethod
    async def save(self, guest: Guest) -> Guest:
        """Insert a guest, assigning the next id"""
        pass

    @abstractmethod
    async def find_by_id(self, guest_id: int) -> Optional[Guest]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Guest]:
        pass

    @abstractmethod
    async def update(self, guest: Guest) -> Optional[Guest]:
        """Overwrite an existing guest; None if the id is unknown"""
        pass

    @abstractmethod
    async def delete(self, guest_id: int) -> bool:
        pass


class RoomRepository(ABC):
    """Repository interface for Room, keyed by room number"""

    @abstractmethod
    async def save(self, room: Room) -> Room:
        """Insert or overwrite by room number"""
        pass

    @abstractmethod
    async def find_by_number(self, room_number: int) -> Optional[Room]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Room]:
        pass

    @abstractmethod
    async def update(self, room: Room) -> Optional[Room]:
        """Overwrite an existing room; None if the number is unknown"""
        pass

    @abstractmethod
    async def delete(self, room_number: int) -> bool:
        pass


class ReservationRepository(ABC):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    async def save(self, reservation: Reservation) -> Reservation:
        """Insert a reservation, assigning the next id"""
        pass

    @abstractmethod
    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_guest_id(self, guest_id: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_room_number(self, room_number: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_overlapping(self, date_range: DateRange, inclusive: bool = True) -> List[Reservation]:
        """Find reservations of any status whose stay overlaps the range"""
        pass

    @abstractmethod
    async def find_active_overlapping(
        self,
        room_number: int,
        date_range: DateRange,
        inclusive: bool = True,
        exclude_id: Optional[int] = None
    ) -> List[Reservation]:
        """Find non-cancelled reservations of a room that conflict with the range"""
        pass

    @abstractmethod
    async def update(self, reservation: Reservation) -> Optional[Reservation]:
        pass


class BillRepository(ABC):
    """Repository interface for Bill Aggregate"""

    @abstractmethod
    async def save(self, bill: Bill) -> Bill:
        """Insert a bill, assigning the next id"""
        pass

    @abstractmethod
    async def find_by_id(self, bill_id: int) -> Optional[Bill]:
        pass

    @abstractmethod
    async def find_by_reservation_id(self, reservation_id: int) -> Optional[Bill]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Bill]:
        pass

    @abstractmethod
    async def find_by_paid_status(self, paid: bool) -> List[Bill]:
        pass

    @abstractmethod
    async def update(self, bill: Bill) -> Optional[Bill]:
        pass
