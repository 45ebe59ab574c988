"""API Dependencies - Service wiring"""
from application.services import GuestService, RoomService, ReservationService, BillingService
from infrastructure.repositories.in_memory_repositories import (
    InMemoryGuestRepository, InMemoryRoomRepository,
    InMemoryReservationRepository, InMemoryBillRepository
)
from config import settings


class HotelContainer:
    """Repositories and the services built on them, for one hotel"""

    def __init__(self, strict_overlap: bool = False, room_charge_description: str = "Room Charge"):
        self.guest_repo = InMemoryGuestRepository()
        self.room_repo = InMemoryRoomRepository()
        self.reservation_repo = InMemoryReservationRepository()
        self.bill_repo = InMemoryBillRepository()

        self.guest_service = GuestService(self.guest_repo)
        self.room_service = RoomService(self.room_repo)
        self.reservation_service = ReservationService(
            self.reservation_repo, self.room_service, self.guest_repo,
            strict_overlap=strict_overlap
        )
        self.billing_service = BillingService(
            self.bill_repo, self.reservation_repo,
            room_charge_description=room_charge_description
        )


hotel = HotelContainer(
    strict_overlap=settings.STRICT_DATE_OVERLAP,
    room_charge_description=settings.ROOM_CHARGE_DESCRIPTION
)


def get_guest_service() -> GuestService:
    return hotel.guest_service


def get_room_service() -> RoomService:
    return hotel.room_service


def get_reservation_service() -> ReservationService:
    return hotel.reservation_service


def get_billing_service() -> BillingService:
    return hotel.billing_service
