"""
Job dispatcher - routes resolved webhook actions to their sheet operations.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Optional
from config.settings import Settings
from models.records import ActionResult, AppointmentStatus
from services.action_router import Action, ActionRequest
from services.google_sheets import GoogleSheetsService
from services import row_codec
from utils.logger import logger


PHONE_REQUIRED = "Phone number is required"
JOB_NOT_FOUND = "No job found for this phone number"
ACKNOWLEDGEMENT = "Thanks, your details have been received."
GENERIC_ERROR = "Sorry, something went wrong while saving your details. Please try again shortly."


class JobDispatcher:
    """Runs one action against the spreadsheet and normalizes the outcome."""

    def __init__(
        self,
        sheets: GoogleSheetsService,
        settings: Settings,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.sheets = sheets
        self.settings = settings
        self.clock = clock
        self._handlers: Dict[Action, Callable[[Dict[str, Any]], ActionResult]] = {
            Action.CREATE_JOB: self.create_job,
            Action.GET_JOB: self.get_job,
            Action.RESCHEDULE: self.reschedule,
            Action.CANCELLATION: self.cancel,
            Action.LOG_EMERGENCY: self.log_emergency,
            Action.COLLECT_INQUIRY: self.collect_inquiry,
        }

    def _timestamp(self) -> str:
        return row_codec.utc_timestamp(self.clock() if self.clock else None)

    def dispatch(self, request: ActionRequest) -> Optional[ActionResult]:
        """
        Run the handler for a resolved request.

        Returns None when the request carries no action (nothing to do).
        Backend errors propagate to the caller.
        """
        if request.action is None:
            logger.info("No action matched the payload, acknowledging")
            return None

        logger.info(f"Dispatching {request.action.value} (rule: {request.rule})")
        return self._handlers[request.action](request.data)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def create_job(self, data: Dict[str, Any]) -> ActionResult:
        row = row_codec.encode_job(data, self._timestamp())
        self.sheets.append_row(self.settings.jobs_sheet_name, row)

        name = row[1]
        message = f"Job created successfully for {name}" if name else "Job created successfully"
        return ActionResult(success=True, message=message)

    def get_job(self, data: Dict[str, Any]) -> ActionResult:
        phone_number = data.get("phone_number")
        if not phone_number:
            return ActionResult(success=False, message=PHONE_REQUIRED)

        match = self.sheets.find_by_key(
            self.settings.jobs_sheet_name, str(phone_number), key_column=row_codec.PHONE_COLUMN_INDEX
        )
        if match is None:
            return ActionResult(success=True, found=False, message=JOB_NOT_FOUND)

        return ActionResult(success=True, found=True, job=row_codec.decode_job(match.row))

    def reschedule(self, data: Dict[str, Any]) -> ActionResult:
        updates = {row_codec.STATUS_COLUMN: AppointmentStatus.RESCHEDULED.value}
        preferred_time = row_codec.preferred_time_of(data)
        if preferred_time:
            updates[row_codec.PREFERRED_TIME_COLUMN] = preferred_time

        return self._update_job(data, updates, "Job rescheduled successfully")

    def cancel(self, data: Dict[str, Any]) -> ActionResult:
        updates = {row_codec.STATUS_COLUMN: AppointmentStatus.CANCELLED.value}
        return self._update_job(data, updates, "Job cancelled successfully")

    def _update_job(self, data: Dict[str, Any], updates: Dict[str, str], message: str) -> ActionResult:
        phone_number = data.get("phone_number")
        if not phone_number:
            return ActionResult(success=False, message=PHONE_REQUIRED)

        match = self.sheets.find_by_key(
            self.settings.jobs_sheet_name, str(phone_number), key_column=row_codec.PHONE_COLUMN_INDEX
        )
        if match is None:
            return ActionResult(success=False, message=JOB_NOT_FOUND)

        self.sheets.update_cells(
            self.settings.jobs_sheet_name,
            match.position,
            {row_codec.TIMESTAMP_COLUMN: self._timestamp(), **updates}
        )
        return ActionResult(success=True, message=message)

    def log_emergency(self, data: Dict[str, Any]) -> ActionResult:
        row = row_codec.encode_emergency(data, self._timestamp())
        self.sheets.append_row(self.settings.emergency_sheet_name, row)
        return ActionResult(success=True, message="Emergency logged successfully")

    def collect_inquiry(self, data: Dict[str, Any]) -> ActionResult:
        row = row_codec.encode_inquiry(data, self._timestamp())
        self.sheets.append_row(self.settings.inquiry_sheet_name, row)
        return ActionResult(success=True, message="Inquiry logged successfully")


def describe_result(result: Optional[ActionResult]) -> str:
    """Render a result as one sentence the voice agent can read back."""
    if result is None:
        return ACKNOWLEDGEMENT

    if result.job is not None:
        job = result.job
        sentence = f"I found a {job.service_type or 'service'} appointment for {job.name or 'this caller'}"
        if job.preferred_time:
            sentence += f" at {job.preferred_time}"
        if job.appointment_status:
            sentence += f", currently {job.appointment_status}"
        return sentence + "."

    return f"{result.message}." if result.message else ACKNOWLEDGEMENT
