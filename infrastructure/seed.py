"""Sample rooms and guests for a fresh in-memory hotel"""
import logging
from decimal import Decimal

from domain.entities import Guest, Room
from domain.enums import RoomType
from domain.repositories import GuestRepository, RoomRepository

logger = logging.getLogger(__name__)

SAMPLE_ROOMS = [
    (101, 1, RoomType.SIMPLE, "100.00"),
    (102, 1, RoomType.SIMPLE, "100.00"),
    (103, 1, RoomType.DOUBLE, "150.00"),
    (201, 2, RoomType.DOUBLE, "150.00"),
    (202, 2, RoomType.SUITE, "250.00"),
]

SAMPLE_GUESTS = [
    ("John", "Doe", "123456789", "555-1234", "john.doe@example.com", "123 Main St"),
    ("Jane", "Smith", "987654321", "555-5678", "jane.smith@example.com", "456 Oak Ave"),
]


async def seed_sample_data(room_repo: RoomRepository, guest_repo: GuestRepository) -> None:
    """Load the sample rooms and guests into an empty hotel"""
    if await guest_repo.find_all():
        logger.info("Guest directory already populated, skipping sample data")
        return

    for room_number, floor, room_type, price in SAMPLE_ROOMS:
        await room_repo.save(Room(
            room_number=room_number,
            floor=floor,
            room_type=room_type,
            price_per_night=Decimal(price)
        ))

    for first_name, last_name, id_number, phone, email, address in SAMPLE_GUESTS:
        await guest_repo.save(Guest(
            first_name=first_name,
            last_name=last_name,
            id_number=id_number,
            phone=phone,
            email=email,
            address=address
        ))

    logger.info("Seeded %d rooms and %d guests", len(SAMPLE_ROOMS), len(SAMPLE_GUESTS))
