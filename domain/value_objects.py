"""Domain Value Objects"""
from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4


class DateRange(BaseModel):
    """Value Object for a stay, check-out night excluded from the count"""
    check_in: date
    check_out: date

    def nights(self) -> int:
        """Calculate number of nights (negative when the range is reversed)"""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange", inclusive: bool = True) -> bool:
        """Check whether two stays compete for the same room.

        The inclusive form treats the check-out day as still occupied, so a
        stay ending on day X conflicts with one starting on day X. The
        half-open form lets them share that day.
        """
        if inclusive:
            return not (self.check_out < other.check_in) and not (self.check_in > other.check_out)
        return self.check_in < other.check_out and other.check_in < self.check_out

    class Config:
        frozen = True


class BillItem(BaseModel):
    """Child Entity for a single bill line"""
    item_id: UUID = Field(default_factory=uuid4)
    description: str
    amount: Decimal

    class Config:
        from_attributes = True
