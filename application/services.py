"""Application Services - Business use cases"""
import asyncio
import logging
from uuid import UUID
from datetime import date
from decimal import Decimal
from typing import List, Optional

from domain.repositories import GuestRepository, RoomRepository, ReservationRepository, BillRepository
from domain.entities import Guest, Room, Reservation, Bill
from domain.enums import RoomType, RoomStatus, ReservationStatus
from domain.value_objects import DateRange, BillItem

logger = logging.getLogger(__name__)


class GuestService:
    """Service for the guest directory"""

    def __init__(self, repository: GuestRepository):
        self.repository = repository
        self._lock = asyncio.Lock()

    async def add_guest(self, guest: Guest) -> Guest:
        """Register a guest under a newly allocated id"""
        async with self._lock:
            saved = await self.repository.save(guest)
        logger.info("Guest %d added: %s", saved.guest_id, saved.full_name())
        return saved

    async def update_guest(self, guest: Guest) -> Optional[Guest]:
        async with self._lock:
            updated = await self.repository.update(guest)
        if updated is None:
            logger.warning("Cannot update unknown guest %d", guest.guest_id)
        return updated

    async def delete_guest(self, guest_id: int) -> bool:
        # Reservations referencing the guest are left as they are.
        async with self._lock:
            return await self.repository.delete(guest_id)

    async def get_guest_by_id(self, guest_id: int) -> Optional[Guest]:
        return await self.repository.find_by_id(guest_id)

    async def get_all_guests(self) -> List[Guest]:
        return await self.repository.find_all()

    async def search_guests_by_name(self, name: str) -> List[Guest]:
        """Case-insensitive substring search on first or last name"""
        guests = await self.repository.find_all()
        return [g for g in guests if g.matches_name(name)]

    async def search_guest_by_id_number(self, id_number: str) -> Optional[Guest]:
        """First guest carrying exactly this id number"""
        for guest in await self.repository.find_all():
            if guest.id_number == id_number:
                return guest
        return None


class RoomService:
    """Service for the room inventory"""

    def __init__(self, repository: RoomRepository):
        self.repository = repository
        self._lock = asyncio.Lock()

    async def add_room(self, room: Room) -> Room:
        """Insert or overwrite a room by its number"""
        async with self._lock:
            saved = await self.repository.save(room)
        logger.info("Room %d stored (%s, %s)", saved.room_number, saved.room_type.value, saved.status.value)
        return saved

    async def update_room(self, room: Room) -> Optional[Room]:
        async with self._lock:
            updated = await self.repository.update(room)
        if updated is None:
            logger.warning("Cannot update unknown room %d", room.room_number)
        return updated

    async def delete_room(self, room_number: int) -> bool:
        async with self._lock:
            return await self.repository.delete(room_number)

    async def get_room_by_number(self, room_number: int) -> Optional[Room]:
        return await self.repository.find_by_number(room_number)

    async def get_all_rooms(self) -> List[Room]:
        return await self.repository.find_all()

    async def get_rooms_by_status(self, status: RoomStatus) -> List[Room]:
        rooms = await self.repository.find_all()
        return [r for r in rooms if r.status == status]

    async def get_rooms_by_type(self, room_type: RoomType) -> List[Room]:
        rooms = await self.repository.find_all()
        return [r for r in rooms if r.room_type == room_type]

    async def get_available_rooms(self) -> List[Room]:
        return await self.get_rooms_by_status(RoomStatus.AVAILABLE)

    async def get_available_rooms_by_type(self, room_type: RoomType) -> List[Room]:
        rooms = await self.repository.find_all()
        return [r for r in rooms if r.is_available() and r.room_type == room_type]

    async def change_room_status(self, room_number: int, status: RoomStatus) -> bool:
        """Overwrite the room status; any status may follow any other"""
        async with self._lock:
            room = await self.repository.find_by_number(room_number)
            if not room:
                logger.warning("Cannot change status of unknown room %d", room_number)
                return False
            previous = room.status
            room.status = status
            await self.repository.update(room)
        logger.info("Room %d status %s -> %s", room_number, previous.value, status.value)
        return True


class ReservationService:
    """Service for Reservation business use cases.

    All writes go through a single lock so that the availability check and
    the insert it guards cannot interleave with another writer.
    """

    def __init__(self,
                 repository: ReservationRepository,
                 room_service: RoomService,
                 guest_repo: GuestRepository,
                 strict_overlap: bool = False):
        self.repository = repository
        self.room_service = room_service
        self.guest_repo = guest_repo
        self.inclusive = not strict_overlap
        self._lock = asyncio.Lock()

    async def _has_conflict(
        self,
        room_number: int,
        date_range: DateRange,
        exclude_id: Optional[int] = None
    ) -> bool:
        conflicts = await self.repository.find_active_overlapping(
            room_number, date_range, inclusive=self.inclusive, exclude_id=exclude_id
        )
        return bool(conflicts)

    async def is_room_available(self, room_number: int, check_in: date, check_out: date) -> bool:
        """Room exists, is itself AVAILABLE, and no live reservation overlaps"""
        room = await self.room_service.get_room_by_number(room_number)
        if not room or not room.is_available():
            return False

        date_range = DateRange(check_in=check_in, check_out=check_out)
        return not await self._has_conflict(room_number, date_range)

    async def create_reservation(
        self,
        guest_id: int,
        room_number: int,
        check_in: date,
        check_out: date,
        notes: str = ""
    ) -> Optional[Reservation]:
        """Create a confirmed reservation, or None if the room cannot be had"""
        async with self._lock:
            guest = await self.guest_repo.find_by_id(guest_id)
            if not guest:
                logger.warning("Reservation refused: unknown guest %d", guest_id)
                return None

            room = await self.room_service.get_room_by_number(room_number)
            if not await self.is_room_available(room_number, check_in, check_out):
                logger.warning(
                    "Reservation refused: room %d unavailable %s..%s",
                    room_number, check_in, check_out
                )
                return None

            reservation = Reservation.create(
                guest_id=guest_id,
                room=room,
                date_range=DateRange(check_in=check_in, check_out=check_out),
                notes=notes
            )
            saved = await self.repository.save(reservation)

        logger.info(
            "Reservation %d created: guest %d, room %d, %s..%s, total %s",
            saved.reservation_id, guest_id, room_number, check_in, check_out, saved.total_price
        )
        return saved

    async def update_reservation(
        self,
        reservation_id: int,
        guest_id: Optional[int] = None,
        room_number: Optional[int] = None,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
        notes: Optional[str] = None
    ) -> Optional[Reservation]:
        """Modify an existing reservation.

        Moving the stay (new room or new dates) re-runs the conflict scan,
        ignoring the reservation itself, and reprices it. Returns None when
        the reservation is unknown, the move conflicts, or the reservation is
        past check-in.
        """
        async with self._lock:
            reservation = await self.repository.find_by_id(reservation_id)
            if not reservation:
                return None

            if guest_id is not None and not await self.guest_repo.find_by_id(guest_id):
                logger.warning("Cannot move reservation %d to unknown guest %d", reservation_id, guest_id)
                return None

            new_range = None
            if check_in is not None or check_out is not None:
                new_range = DateRange(
                    check_in=check_in or reservation.date_range.check_in,
                    check_out=check_out or reservation.date_range.check_out
                )

            room = None
            if room_number is not None or new_range is not None:
                target = room_number if room_number is not None else reservation.room_number
                room = await self.room_service.get_room_by_number(target)
                if not room:
                    logger.warning("Cannot move reservation %d to unknown room %d", reservation_id, target)
                    return None

                # Only a new room has to be offerable; the current one may be in any state.
                if target != reservation.room_number and not room.is_available():
                    logger.warning("Cannot move reservation %d: room %d is %s",
                                   reservation_id, target, room.status.value)
                    return None

                if await self._has_conflict(target, new_range or reservation.date_range, exclude_id=reservation_id):
                    logger.warning("Cannot move reservation %d: conflict on room %d", reservation_id, target)
                    return None

            try:
                reservation.modify(guest_id=guest_id, room=room, date_range=new_range, notes=notes)
            except ValueError as e:
                logger.warning("Cannot modify reservation %d: %s", reservation_id, e)
                return None

            return await self.repository.update(reservation)

    async def cancel_reservation(self, reservation_id: int) -> bool:
        """Cancel a reservation from any state; the room status is untouched"""
        async with self._lock:
            reservation = await self.repository.find_by_id(reservation_id)
            if not reservation:
                logger.warning("Cannot cancel unknown reservation %d", reservation_id)
                return False

            reservation.cancel()
            await self.repository.update(reservation)
        logger.info("Reservation %d cancelled", reservation_id)
        return True

    async def check_in(self, reservation_id: int) -> bool:
        """CONFIRMED -> CHECKED_IN, room -> OCCUPIED"""
        async with self._lock:
            reservation = await self.repository.find_by_id(reservation_id)
            if not reservation:
                logger.warning("Cannot check in unknown reservation %d", reservation_id)
                return False

            try:
                reservation.check_in()
            except ValueError as e:
                logger.warning("Reservation %d: %s", reservation_id, e)
                return False

            await self.repository.update(reservation)
            if not await self.room_service.change_room_status(reservation.room_number, RoomStatus.OCCUPIED):
                logger.warning("Reservation %d: room %d not found, status not updated", reservation_id, reservation.room_number)
        logger.info("Reservation %d checked in to room %d", reservation_id, reservation.room_number)
        return True

    async def check_out(self, reservation_id: int) -> bool:
        """CHECKED_IN -> CHECKED_OUT, room -> CLEANING"""
        async with self._lock:
            reservation = await self.repository.find_by_id(reservation_id)
            if not reservation:
                logger.warning("Cannot check out unknown reservation %d", reservation_id)
                return False

            try:
                reservation.check_out()
            except ValueError as e:
                logger.warning("Reservation %d: %s", reservation_id, e)
                return False

            await self.repository.update(reservation)
            if not await self.room_service.change_room_status(reservation.room_number, RoomStatus.CLEANING):
                logger.warning("Reservation %d: room %d not found, status not updated", reservation_id, reservation.room_number)
        logger.info("Reservation %d checked out of room %d", reservation_id, reservation.room_number)
        return True

    async def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        return await self.repository.find_by_id(reservation_id)

    async def get_all_reservations(self) -> List[Reservation]:
        return await self.repository.find_all()

    async def get_reservations_by_guest(self, guest_id: int) -> List[Reservation]:
        return await self.repository.find_by_guest_id(guest_id)

    async def get_reservations_by_room(self, room_number: int) -> List[Reservation]:
        return await self.repository.find_by_room_number(room_number)

    async def get_reservations_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return await self.repository.find_by_status(status)

    async def get_reservations_for_date_range(self, start_date: date, end_date: date) -> List[Reservation]:
        """Reservations of any status overlapping the window"""
        date_range = DateRange(check_in=start_date, check_out=end_date)
        return await self.repository.find_overlapping(date_range, inclusive=self.inclusive)

    async def get_available_rooms_for_dates(self, check_in: date, check_out: date) -> List[Room]:
        """AVAILABLE rooms with no live reservation overlapping the window"""
        overlapping = await self.get_reservations_for_date_range(check_in, check_out)
        taken = {r.room_number for r in overlapping if r.is_active()}
        rooms = await self.room_service.get_available_rooms()
        return [room for room in rooms if room.room_number not in taken]

    async def get_available_rooms_by_type_for_dates(
        self,
        room_type: RoomType,
        check_in: date,
        check_out: date
    ) -> List[Room]:
        rooms = await self.get_available_rooms_for_dates(check_in, check_out)
        return [room for room in rooms if room.room_type == room_type]


class BillingService:
    """Service for the billing ledger"""

    def __init__(self,
                 repository: BillRepository,
                 reservation_repo: ReservationRepository,
                 room_charge_description: str = "Room Charge"):
        self.repository = repository
        self.reservation_repo = reservation_repo
        self.room_charge_description = room_charge_description
        self._lock = asyncio.Lock()

    async def create_bill(self, reservation_id: int) -> Optional[Bill]:
        """Bill a checked-out reservation; returns the existing bill if there is one"""
        async with self._lock:
            reservation = await self.reservation_repo.find_by_id(reservation_id)
            if not reservation:
                logger.warning("Cannot bill unknown reservation %d", reservation_id)
                return None

            if not reservation.is_billable():
                logger.warning("Cannot bill reservation %d with status %s", reservation_id, reservation.status.value)
                return None

            existing = await self.repository.find_by_reservation_id(reservation_id)
            if existing:
                return existing

            try:
                bill = Bill.create(reservation, self.room_charge_description)
            except ValueError as e:
                logger.warning("Reservation %d: %s", reservation_id, e)
                return None

            saved = await self.repository.save(bill)
        logger.info("Bill %d created for reservation %d", saved.bill_id, reservation_id)
        return saved

    async def add_item_to_bill(self, bill_id: int, description: str, amount: Decimal) -> Optional[BillItem]:
        async with self._lock:
            bill = await self.repository.find_by_id(bill_id)
            if not bill:
                return None
            item = bill.add_item(description, amount)
            await self.repository.update(bill)
        logger.info("Bill %d: added %s %s", bill_id, description, amount)
        return item

    async def remove_item_from_bill(self, bill_id: int, item_id: UUID) -> bool:
        async with self._lock:
            bill = await self.repository.find_by_id(bill_id)
            if not bill:
                return False
            removed = bill.remove_item(item_id)
            await self.repository.update(bill)
        return removed

    async def mark_bill_as_paid(self, bill_id: int) -> bool:
        async with self._lock:
            bill = await self.repository.find_by_id(bill_id)
            if not bill:
                logger.warning("Cannot mark unknown bill %d as paid", bill_id)
                return False
            if not bill.paid:
                bill.mark_paid()
                await self.repository.update(bill)
                logger.info("Bill %d paid", bill_id)
        return True

    async def calculate_total(self, bill_id: int) -> Decimal:
        """Sum of all lines; zero for an unknown bill"""
        bill = await self.repository.find_by_id(bill_id)
        if not bill:
            return Decimal("0")
        return bill.calculate_total()

    async def get_bill(self, bill_id: int) -> Optional[Bill]:
        return await self.repository.find_by_id(bill_id)

    async def get_bill_by_reservation(self, reservation_id: int) -> Optional[Bill]:
        return await self.repository.find_by_reservation_id(reservation_id)

    async def get_all_bills(self) -> List[Bill]:
        return await self.repository.find_all()

    async def get_bills_by_paid_status(self, paid: bool) -> List[Bill]:
        return await self.repository.find_by_paid_status(paid)
