import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import FastAPI, HTTPException, Depends

from api.schemas import (
    # Rooms
    CreateRoomRequest, UpdateRoomRequest, ChangeRoomStatusRequest, RoomResponse,
    # Guests
    GuestRequest, GuestResponse,
    # Reservations
    CreateReservationRequest, ModifyReservationRequest, CheckAvailabilityRequest,
    ReservationResponse,
    # Bills
    CreateBillRequest, AddBillItemRequest, BillItemResponse, BillResponse, MoneyResponse
)
from api.dependencies import (
    hotel, get_guest_service, get_room_service, get_reservation_service, get_billing_service
)
from application.services import GuestService, RoomService, ReservationService, BillingService
from config import settings
from domain.entities import Guest, Room
from domain.enums import RoomType, RoomStatus, ReservationStatus
from infrastructure.seed import seed_sample_data

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_SAMPLE_DATA:
        await seed_sample_data(hotel.room_repo, hotel.guest_repo)
    logger.info("%s ready", settings.APP_NAME)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Rooms, guests, reservations and billing for a single hotel",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/room-type", tags=["Enum Reference"])
async def get_room_types():
    """Get all RoomType values with their capacity"""
    return {"values": {item.name: item.capacity for item in RoomType}}

@app.get("/api/enums/room-status", tags=["Enum Reference"])
async def get_room_statuses():
    return {"values": [item.name for item in RoomStatus]}

@app.get("/api/enums/reservation-status", tags=["Enum Reference"])
async def get_reservation_statuses():
    return {"values": [item.name for item in ReservationStatus]}

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@app.post("/api/rooms", response_model=RoomResponse, status_code=201, tags=["Rooms"])
async def add_room(
    request: CreateRoomRequest,
    service: RoomService = Depends(get_room_service)
):
    """Add a room, replacing any room with the same number"""
    room = await service.add_room(Room(**request.model_dump()))
    return _room_to_response(room)

@app.get("/api/rooms", response_model=List[RoomResponse], tags=["Rooms"])
async def get_all_rooms(service: RoomService = Depends(get_room_service)):
    return [_room_to_response(r) for r in await service.get_all_rooms()]

@app.get("/api/rooms/available", response_model=List[RoomResponse], tags=["Rooms"])
async def get_available_rooms(
    room_type: Optional[RoomType] = None,
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
    room_service: RoomService = Depends(get_room_service),
    reservation_service: ReservationService = Depends(get_reservation_service)
):
    """Rooms that can be offered, optionally for a stay and of one type"""
    if (check_in is None) != (check_out is None):
        raise HTTPException(status_code=400, detail="check_in and check_out must be given together")

    if check_in is not None:
        if room_type is not None:
            rooms = await reservation_service.get_available_rooms_by_type_for_dates(room_type, check_in, check_out)
        else:
            rooms = await reservation_service.get_available_rooms_for_dates(check_in, check_out)
    elif room_type is not None:
        rooms = await room_service.get_available_rooms_by_type(room_type)
    else:
        rooms = await room_service.get_available_rooms()
    return [_room_to_response(r) for r in rooms]

@app.get("/api/rooms/status/{status}", response_model=List[RoomResponse], tags=["Rooms"])
async def get_rooms_by_status(status: RoomStatus, service: RoomService = Depends(get_room_service)):
    return [_room_to_response(r) for r in await service.get_rooms_by_status(status)]

@app.get("/api/rooms/type/{room_type}", response_model=List[RoomResponse], tags=["Rooms"])
async def get_rooms_by_type(room_type: RoomType, service: RoomService = Depends(get_room_service)):
    return [_room_to_response(r) for r in await service.get_rooms_by_type(room_type)]

@app.get("/api/rooms/{room_number}", response_model=RoomResponse, tags=["Rooms"])
async def get_room(room_number: int, service: RoomService = Depends(get_room_service)):
    room = await service.get_room_by_number(room_number)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return _room_to_response(room)

@app.put("/api/rooms/{room_number}", response_model=RoomResponse, tags=["Rooms"])
async def update_room(
    room_number: int,
    request: UpdateRoomRequest,
    service: RoomService = Depends(get_room_service)
):
    current = await service.get_room_by_number(room_number)
    if not current:
        raise HTTPException(status_code=404, detail="Room not found")
    fields = request.model_dump()
    if fields["status"] is None:
        fields["status"] = current.status
    room = await service.update_room(Room(room_number=room_number, **fields))
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return _room_to_response(room)

@app.delete("/api/rooms/{room_number}", status_code=204, tags=["Rooms"])
async def delete_room(room_number: int, service: RoomService = Depends(get_room_service)):
    if not await service.delete_room(room_number):
        raise HTTPException(status_code=404, detail="Room not found")

@app.post("/api/rooms/{room_number}/status", response_model=RoomResponse, tags=["Rooms"])
async def change_room_status(
    room_number: int,
    request: ChangeRoomStatusRequest,
    service: RoomService = Depends(get_room_service)
):
    """Operator status change, e.g. flagging a room for maintenance"""
    if not await service.change_room_status(room_number, request.status):
        raise HTTPException(status_code=404, detail="Room not found")
    return _room_to_response(await service.get_room_by_number(room_number))

# ============================================================================
# GUEST ENDPOINTS
# ============================================================================

@app.post("/api/guests", response_model=GuestResponse, status_code=201, tags=["Guests"])
async def add_guest(request: GuestRequest, service: GuestService = Depends(get_guest_service)):
    guest = await service.add_guest(Guest(**request.model_dump()))
    return _guest_to_response(guest)

@app.get("/api/guests", response_model=List[GuestResponse], tags=["Guests"])
async def get_all_guests(service: GuestService = Depends(get_guest_service)):
    return [_guest_to_response(g) for g in await service.get_all_guests()]

@app.get("/api/guests/search", response_model=List[GuestResponse], tags=["Guests"])
async def search_guests(name: str, service: GuestService = Depends(get_guest_service)):
    """Search guests by part of their first or last name"""
    return [_guest_to_response(g) for g in await service.search_guests_by_name(name)]

@app.get("/api/guests/id-number/{id_number}", response_model=GuestResponse, tags=["Guests"])
async def get_guest_by_id_number(id_number: str, service: GuestService = Depends(get_guest_service)):
    guest = await service.search_guest_by_id_number(id_number)
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return _guest_to_response(guest)

@app.get("/api/guests/{guest_id}", response_model=GuestResponse, tags=["Guests"])
async def get_guest(guest_id: int, service: GuestService = Depends(get_guest_service)):
    guest = await service.get_guest_by_id(guest_id)
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return _guest_to_response(guest)

@app.put("/api/guests/{guest_id}", response_model=GuestResponse, tags=["Guests"])
async def update_guest(
    guest_id: int,
    request: GuestRequest,
    service: GuestService = Depends(get_guest_service)
):
    guest = await service.update_guest(Guest(guest_id=guest_id, **request.model_dump()))
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return _guest_to_response(guest)

@app.delete("/api/guests/{guest_id}", status_code=204, tags=["Guests"])
async def delete_guest(guest_id: int, service: GuestService = Depends(get_guest_service)):
    if not await service.delete_guest(guest_id):
        raise HTTPException(status_code=404, detail="Guest not found")

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Create new reservation"""
    reservation = await service.create_reservation(
        guest_id=request.guest_id,
        room_number=request.room_number,
        check_in=request.check_in,
        check_out=request.check_out,
        notes=request.notes
    )
    if not reservation:
        raise HTTPException(status_code=409, detail="Room is not available for these dates")
    return _reservation_to_response(reservation)

@app.get("/api/reservations", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_all_reservations(service: ReservationService = Depends(get_reservation_service)):
    """Get all reservations"""
    return [_reservation_to_response(r) for r in await service.get_all_reservations()]

@app.get("/api/reservations/range", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_for_date_range(
    start: date,
    end: date,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservations overlapping a date window"""
    reservations = await service.get_reservations_for_date_range(start, end)
    return [_reservation_to_response(r) for r in reservations]

@app.get("/api/reservations/guest/{guest_id}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_guest_reservations(guest_id: int, service: ReservationService = Depends(get_reservation_service)):
    """Get all reservations for a guest"""
    return [_reservation_to_response(r) for r in await service.get_reservations_by_guest(guest_id)]

@app.get("/api/reservations/room/{room_number}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_room_reservations(room_number: int, service: ReservationService = Depends(get_reservation_service)):
    return [_reservation_to_response(r) for r in await service.get_reservations_by_room(room_number)]

@app.get("/api/reservations/status/{status}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_by_status(
    status: ReservationStatus,
    service: ReservationService = Depends(get_reservation_service)
):
    return [_reservation_to_response(r) for r in await service.get_reservations_by_status(status)]

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    """Get reservation by ID"""
    reservation = await service.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return _reservation_to_response(reservation)

@app.put("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def modify_reservation(
    reservation_id: int,
    request: ModifyReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Modify reservation details"""
    await _require_reservation(service, reservation_id)
    reservation = await service.update_reservation(
        reservation_id=reservation_id,
        guest_id=request.guest_id,
        room_number=request.room_number,
        check_in=request.check_in,
        check_out=request.check_out,
        notes=request.notes
    )
    if not reservation:
        raise HTTPException(status_code=409, detail="Reservation cannot be changed this way")
    return _reservation_to_response(reservation)

@app.post("/api/reservations/{reservation_id}/check-in", response_model=ReservationResponse, tags=["Reservations"])
async def check_in_guest(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    """Check in guest"""
    reservation = await _require_reservation(service, reservation_id)
    if not await service.check_in(reservation_id):
        raise HTTPException(status_code=409, detail=f"Cannot check in with status {reservation.status.value}")
    return _reservation_to_response(reservation)

@app.post("/api/reservations/{reservation_id}/check-out", response_model=ReservationResponse, tags=["Reservations"])
async def check_out_guest(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    """Check out guest"""
    reservation = await _require_reservation(service, reservation_id)
    if not await service.check_out(reservation_id):
        raise HTTPException(status_code=409, detail=f"Cannot check out with status {reservation.status.value}")
    return _reservation_to_response(reservation)

@app.post("/api/reservations/{reservation_id}/cancel", response_model=ReservationResponse, tags=["Reservations"])
async def cancel_reservation(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    """Cancel reservation"""
    reservation = await _require_reservation(service, reservation_id)
    await service.cancel_reservation(reservation_id)
    return _reservation_to_response(reservation)

@app.post("/api/availability/check", tags=["Availability"])
async def check_availability(
    request: CheckAvailabilityRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Check if a room can be booked for a date range"""
    available = await service.is_room_available(request.room_number, request.check_in, request.check_out)
    return {"available": available}

# ============================================================================
# BILL ENDPOINTS
# ============================================================================

@app.post("/api/bills", response_model=BillResponse, status_code=201, tags=["Bills"])
async def create_bill(
    request: CreateBillRequest,
    service: BillingService = Depends(get_billing_service),
    reservation_service: ReservationService = Depends(get_reservation_service)
):
    """Bill a checked-out reservation (returns the existing bill if already billed)"""
    await _require_reservation(reservation_service, request.reservation_id)
    bill = await service.create_bill(request.reservation_id)
    if not bill:
        raise HTTPException(status_code=409, detail="Only checked-out reservations can be billed")
    return _bill_to_response(bill)

@app.get("/api/bills", response_model=List[BillResponse], tags=["Bills"])
async def get_bills(paid: Optional[bool] = None, service: BillingService = Depends(get_billing_service)):
    if paid is None:
        bills = await service.get_all_bills()
    else:
        bills = await service.get_bills_by_paid_status(paid)
    return [_bill_to_response(b) for b in bills]

@app.get("/api/bills/reservation/{reservation_id}", response_model=BillResponse, tags=["Bills"])
async def get_bill_by_reservation(reservation_id: int, service: BillingService = Depends(get_billing_service)):
    bill = await service.get_bill_by_reservation(reservation_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return _bill_to_response(bill)

@app.get("/api/bills/{bill_id}", response_model=BillResponse, tags=["Bills"])
async def get_bill(bill_id: int, service: BillingService = Depends(get_billing_service)):
    bill = await _require_bill(service, bill_id)
    return _bill_to_response(bill)

@app.post("/api/bills/{bill_id}/items", response_model=BillItemResponse, status_code=201, tags=["Bills"])
async def add_bill_item(
    bill_id: int,
    request: AddBillItemRequest,
    service: BillingService = Depends(get_billing_service)
):
    item = await service.add_item_to_bill(bill_id, request.description, request.amount)
    if not item:
        raise HTTPException(status_code=404, detail="Bill not found")
    return BillItemResponse(item_id=item.item_id, description=item.description, amount=item.amount)

@app.delete("/api/bills/{bill_id}/items/{item_id}", status_code=204, tags=["Bills"])
async def remove_bill_item(bill_id: int, item_id: UUID, service: BillingService = Depends(get_billing_service)):
    bill = await _require_bill(service, bill_id)
    if not bill.get_item(item_id):
        raise HTTPException(status_code=404, detail="Bill item not found")
    await service.remove_item_from_bill(bill_id, item_id)

@app.post("/api/bills/{bill_id}/pay", response_model=BillResponse, tags=["Bills"])
async def pay_bill(bill_id: int, service: BillingService = Depends(get_billing_service)):
    """Mark bill as paid"""
    if not await service.mark_bill_as_paid(bill_id):
        raise HTTPException(status_code=404, detail="Bill not found")
    return _bill_to_response(await service.get_bill(bill_id))

@app.get("/api/bills/{bill_id}/total", response_model=MoneyResponse, tags=["Bills"])
async def get_bill_total(bill_id: int, service: BillingService = Depends(get_billing_service)):
    return {"amount": await service.calculate_total(bill_id)}

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

async def _require_reservation(service: ReservationService, reservation_id: int):
    reservation = await service.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation

async def _require_bill(service: BillingService, bill_id: int):
    bill = await service.get_bill(bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill

def _room_to_response(room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        room_number=room.room_number,
        floor=room.floor,
        room_type=room.room_type.value,
        capacity=room.room_type.capacity,
        status=room.status.value,
        price_per_night=room.price_per_night,
        description=room.description
    )

def _guest_to_response(guest) -> GuestResponse:
    """Convert Guest entity to GuestResponse"""
    return GuestResponse(
        guest_id=guest.guest_id,
        first_name=guest.first_name,
        last_name=guest.last_name,
        full_name=guest.full_name(),
        id_number=guest.id_number,
        phone=guest.phone,
        email=guest.email,
        address=guest.address
    )

def _reservation_to_response(reservation) -> ReservationResponse:
    """Convert Reservation entity to ReservationResponse"""
    return ReservationResponse(
        reservation_id=reservation.reservation_id,
        guest_id=reservation.guest_id,
        room_number=reservation.room_number,
        check_in=reservation.date_range.check_in,
        check_out=reservation.date_range.check_out,
        nights=reservation.get_nights(),
        total_price=reservation.total_price,
        status=reservation.status.value,
        notes=reservation.notes,
        created_at=reservation.created_at,
        modified_at=reservation.modified_at,
        version=reservation.version
    )

def _bill_to_response(bill) -> BillResponse:
    """Convert Bill entity to BillResponse"""
    return BillResponse(
        bill_id=bill.bill_id,
        reservation_id=bill.reservation_id,
        issue_date=bill.issue_date,
        paid=bill.paid,
        items=[
            BillItemResponse(item_id=item.item_id, description=item.description, amount=item.amount)
            for item in bill.items
        ],
        total=bill.calculate_total()
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
