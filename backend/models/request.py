from pydantic import Field
from datetime import date, datetime, timezone
import uuid

from .base import ApiModel
from .enums import BloodGroup, RequestStatus

MIN_UNITS = 1
MAX_UNITS = 10

class BloodRequest(ApiModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    patient_name: str
    blood_group: BloodGroup
    units_required: int
    hospital_name: str
    hospital_address: str
    city: str
    required_date: date
    requester_phone: str
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class BloodRequestCreate(ApiModel):
    patient_name: str = Field(min_length=1)
    blood_group: BloodGroup
    units_required: int = Field(ge=MIN_UNITS, le=MAX_UNITS)
    hospital_name: str = Field(min_length=1)
    hospital_address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    required_date: date
    requester_phone: str = Field(min_length=1)

class RequestSubmitted(ApiModel):
    message: str = "Request submitted successfully"
    matching_donors: int
