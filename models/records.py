"""
Record models for the rows kept in the call-center spreadsheet.
"""
from typing import Optional
from pydantic import BaseModel
import enum


class AppointmentStatus(str, enum.Enum):
    """Appointment status values written to the Jobs sheet (column I)."""
    BOOKED = "Booked"
    RESCHEDULED = "Rescheduled"
    CANCELLED = "Cancelled"


class JobRecord(BaseModel):
    """A decoded row of the Jobs sheet."""
    timestamp: str = ""
    name: str = ""
    email: str = ""
    phone_number: str = ""
    service_type: str = ""
    preferred_time: str = ""
    location_type: str = ""
    location: str = ""
    appointment_status: str = ""
    call_duration: str = ""


class RowMatch(BaseModel):
    """Result of a key lookup: 1-based sheet row position and its raw cells."""
    position: int
    row: list


class ActionResult(BaseModel):
    """Normalized outcome of a dispatched action."""
    success: bool
    message: Optional[str] = None
    found: Optional[bool] = None
    job: Optional[JobRecord] = None

    def to_response(self) -> dict:
        """JSON body for the strict webhook, omitting unset fields."""
        return self.model_dump(exclude_none=True)
