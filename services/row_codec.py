"""
Row codec: maps webhook payloads to ordered sheet rows and back.

Column layouts (0-indexed):

    Jobs:      timestamp, name, email, phone_number, service_type,
               preferred_time, location_type, location, appointment_status,
               call_duration
    Emergency: timestamp, name, phone_number, location, emergency_details,
               call_duration
    Inquiry:   timestamp, name, phone_number, location,
               inquiry_details (or service_type), call_duration
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from models.records import AppointmentStatus, JobRecord


JOB_FIELDS = list(JobRecord.model_fields)

# Column letters on the Jobs sheet
TIMESTAMP_COLUMN = "A"
PREFERRED_TIME_COLUMN = "F"
STATUS_COLUMN = "I"
PHONE_COLUMN_INDEX = 3

# Header rows written by scripts/setup_sheet_columns.py
JOB_HEADERS = [
    "Timestamp", "Name", "Email", "Phone Number", "Service Type", "Preferred Time",
    "Location Type", "Location", "Appointment Status", "Call Duration",
]
EMERGENCY_HEADERS = ["Timestamp", "Name", "Phone Number", "Location", "Emergency Details", "Call Duration"]
INQUIRY_HEADERS = ["Timestamp", "Name", "Phone Number", "Location", "Inquiry Details", "Call Duration"]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _cell(value: Any) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def preferred_time_of(data: Mapping[str, Any]) -> str:
    """Preferred time from either spelling; the historical ``preferred_Time`` wins."""
    return _cell(data.get("preferred_Time")) or _cell(data.get("preferred_time"))


def encode_job(data: Mapping[str, Any], timestamp: str) -> List[str]:
    return [
        timestamp,
        _cell(data.get("name")),
        _cell(data.get("email")),
        _cell(data.get("phone_number")),
        _cell(data.get("service_type")),
        preferred_time_of(data),
        _cell(data.get("location_type")),
        _cell(data.get("location")),
        _cell(data.get("appointment_status")) or AppointmentStatus.BOOKED.value,
        _cell(data.get("call_duration")),
    ]


def encode_emergency(data: Mapping[str, Any], timestamp: str) -> List[str]:
    return [
        timestamp,
        _cell(data.get("name")),
        _cell(data.get("phone_number")),
        _cell(data.get("location")),
        _cell(data.get("emergency_details")),
        _cell(data.get("call_duration")),
    ]


def encode_inquiry(data: Mapping[str, Any], timestamp: str) -> List[str]:
    return [
        timestamp,
        _cell(data.get("name")),
        _cell(data.get("phone_number")),
        _cell(data.get("location")),
        _cell(data.get("inquiry_details")) or _cell(data.get("service_type")),
        _cell(data.get("call_duration")),
    ]


def decode_job(row: List[Any]) -> JobRecord:
    """
    Decode a Jobs row into a JobRecord.

    The Sheets API trims trailing empty cells, so short rows are padded.
    """
    values: Dict[str, str] = {}
    for idx, field in enumerate(JOB_FIELDS):
        values[field] = _cell(row[idx]) if idx < len(row) else ""
    return JobRecord(**values)
