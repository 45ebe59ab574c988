"""Domain Entities - Aggregates"""
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, List
from decimal import Decimal

from domain.enums import RoomType, RoomStatus, ReservationStatus
from domain.value_objects import DateRange, BillItem


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Guest(BaseModel):
    """Guest Entity"""

    # Identity (0 until the directory assigns one)
    guest_id: int = 0

    first_name: str
    last_name: str
    id_number: str  # passport, national ID, ...
    phone: str = ""
    email: str = ""
    address: str = ""

    class Config:
        from_attributes = True

    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def matches_name(self, term: str) -> bool:
        """Case-insensitive substring match on first or last name"""
        term = term.lower()
        return term in self.first_name.lower() or term in self.last_name.lower()


class Room(BaseModel):
    """Room Entity, identified by its room number"""

    room_number: int
    floor: int
    room_type: RoomType
    status: RoomStatus = RoomStatus.AVAILABLE
    price_per_night: Decimal
    description: str = ""

    class Config:
        from_attributes = True

    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity"""

    # Identity
    reservation_id: int = 0

    # References to other aggregates
    guest_id: int
    room_number: int

    # Value Objects
    date_range: DateRange
    total_price: Decimal

    status: ReservationStatus = ReservationStatus.CONFIRMED
    notes: str = ""

    # Metadata
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)
    version: int = 1

    class Config:
        from_attributes = True

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        guest_id: int,
        room: Room,
        date_range: DateRange,
        notes: str = ""
    ) -> "Reservation":
        """Create a confirmed reservation priced from the room's nightly rate"""
        return Reservation(
            guest_id=guest_id,
            room_number=room.room_number,
            date_range=date_range,
            total_price=Reservation.calculate_total_price(room, date_range),
            status=ReservationStatus.CONFIRMED,
            notes=notes
        )

    @staticmethod
    def calculate_total_price(room: Room, date_range: DateRange) -> Decimal:
        """Nights times nightly price"""
        return room.price_per_night * date_range.nights()

    # ==================== MODIFICATION METHODS ====================
    def modify(
        self,
        guest_id: Optional[int] = None,
        room: Optional[Room] = None,
        date_range: Optional[DateRange] = None,
        notes: Optional[str] = None
    ) -> None:
        """Modify reservation details.

        ``room`` must be the live record for the reservation's (possibly new)
        room whenever ``date_range`` or ``room`` changes, so the price can be
        recomputed.
        """
        if (room is not None or date_range is not None) and not self.is_modifiable():
            raise ValueError(
                f"Cannot change room or dates of reservation in {self.status.value} status"
            )
        if date_range is not None and room is None:
            raise ValueError("Room is required to reprice new dates")

        if guest_id is not None:
            self.guest_id = guest_id

        if date_range is not None:
            self.date_range = date_range

        if room is not None:
            self.room_number = room.room_number
            self.total_price = Reservation.calculate_total_price(room, self.date_range)

        if notes is not None:
            self.notes = notes

        self._touch()

    # ==================== STATE TRANSITION METHODS ====================
    def check_in(self) -> None:
        """Mark guest as checked in"""
        if self.status != ReservationStatus.CONFIRMED:
            raise ValueError(f"Cannot check in with status {self.status.value}")

        self.status = ReservationStatus.CHECKED_IN
        self._touch()

    def check_out(self) -> None:
        """Process guest check-out"""
        if self.status != ReservationStatus.CHECKED_IN:
            raise ValueError(f"Cannot check out with status {self.status.value}")

        self.status = ReservationStatus.CHECKED_OUT
        self._touch()

    def cancel(self) -> None:
        # Not gated on the current status; room status is left alone.
        self.status = ReservationStatus.CANCELLED
        self._touch()

    # ==================== QUERY METHODS ====================
    def is_modifiable(self) -> bool:
        """Room and dates can only change before check-in"""
        return self.status == ReservationStatus.CONFIRMED

    def is_active(self) -> bool:
        """Whether the reservation still holds its room"""
        return self.status != ReservationStatus.CANCELLED

    def is_billable(self) -> bool:
        return self.status == ReservationStatus.CHECKED_OUT

    def get_nights(self) -> int:
        """Get number of nights"""
        return self.date_range.nights()

    def overlaps(self, date_range: DateRange, inclusive: bool = True) -> bool:
        return self.date_range.overlaps(date_range, inclusive=inclusive)

    def _touch(self) -> None:
        self.modified_at = _now()
        self.version += 1


class Bill(BaseModel):
    """Bill Aggregate Root Entity"""

    # Identity
    bill_id: int = 0

    # Reference to a checked-out reservation
    reservation_id: int

    issue_date: datetime = Field(default_factory=_now)
    paid: bool = False
    items: List[BillItem] = []

    class Config:
        from_attributes = True

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(reservation: Reservation, room_charge_description: str = "Room Charge") -> "Bill":
        """Create a bill seeded with the room charge"""
        if not reservation.is_billable():
            raise ValueError(
                f"Cannot bill reservation with status {reservation.status.value}"
            )

        bill = Bill(reservation_id=reservation.reservation_id)
        bill.add_item(room_charge_description, reservation.total_price)
        return bill

    # ==================== ITEM METHODS ====================
    def add_item(self, description: str, amount: Decimal) -> BillItem:
        item = BillItem(description=description, amount=amount)
        self.items.append(item)
        return item

    def remove_item(self, item_id) -> bool:
        """Remove a line by its id; False if no such line"""
        for index, item in enumerate(self.items):
            if item.item_id == item_id:
                del self.items[index]
                return True
        return False

    def get_item(self, item_id) -> Optional[BillItem]:
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None

    # ==================== PAYMENT ====================
    def mark_paid(self) -> None:
        # One-way flag
        self.paid = True

    def calculate_total(self) -> Decimal:
        """Exact decimal sum of all lines"""
        return sum((item.amount for item in self.items), Decimal("0"))
