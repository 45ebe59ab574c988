"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Optional

from domain.enums import RoomType, RoomStatus


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class CreateRoomRequest(BaseModel):
    """Create room request DTO"""
    room_number: int
    floor: int
    room_type: RoomType
    price_per_night: Decimal
    status: RoomStatus = RoomStatus.AVAILABLE
    description: str = ""


class UpdateRoomRequest(BaseModel):
    """Update room request DTO, replaces every attribute but the number;
    an omitted status keeps the current one"""
    floor: int
    room_type: RoomType
    price_per_night: Decimal
    status: Optional[RoomStatus] = None
    description: str = ""


class ChangeRoomStatusRequest(BaseModel):
    status: RoomStatus


class RoomResponse(BaseModel):
    """Room response DTO"""
    room_number: int
    floor: int
    room_type: str
    capacity: int
    status: str
    price_per_night: Decimal
    description: str


# ============================================================================
# GUEST SCHEMAS
# ============================================================================

class GuestRequest(BaseModel):
    """Create/update guest request DTO"""
    first_name: str
    last_name: str
    id_number: str
    phone: str = ""
    email: str = ""
    address: str = ""


class GuestResponse(BaseModel):
    """Guest response DTO"""
    guest_id: int
    first_name: str
    last_name: str
    full_name: str
    id_number: str
    phone: str
    email: str
    address: str


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    guest_id: int
    room_number: int
    check_in: date
    check_out: date
    notes: str = ""


class ModifyReservationRequest(BaseModel):
    """Modify reservation request DTO"""
    guest_id: Optional[int] = None
    room_number: Optional[int] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    notes: Optional[str] = None


class CheckAvailabilityRequest(BaseModel):
    """Check availability request DTO"""
    room_number: int
    check_in: date
    check_out: date


class ReservationResponse(BaseModel):
    """Reservation response DTO"""
    reservation_id: int
    guest_id: int
    room_number: int
    check_in: date
    check_out: date
    nights: int
    total_price: Decimal
    status: str
    notes: str
    created_at: datetime
    modified_at: datetime
    version: int


# ============================================================================
# BILL SCHEMAS
# ============================================================================

class CreateBillRequest(BaseModel):
    reservation_id: int


class AddBillItemRequest(BaseModel):
    """Add bill item request DTO"""
    description: str
    amount: Decimal


class BillItemResponse(BaseModel):
    item_id: UUID
    description: str
    amount: Decimal


class BillResponse(BaseModel):
    """Bill response DTO"""
    bill_id: int
    reservation_id: int
    issue_date: datetime
    paid: bool
    items: List[BillItemResponse]
    total: Decimal


class MoneyResponse(BaseModel):
    """Money response DTO"""
    amount: Decimal
