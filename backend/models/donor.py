from pydantic import Field
from typing import Optional
from datetime import datetime, timezone
import uuid

from .base import ApiModel
from .enums import BloodGroup

MIN_DONOR_AGE = 18
MAX_DONOR_AGE = 65

class Donor(ApiModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    age: int
    blood_group: BloodGroup
    phone: str
    email: Optional[str] = None
    location: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class DonorCreate(ApiModel):
    name: str = Field(min_length=1)
    age: int = Field(ge=MIN_DONOR_AGE, le=MAX_DONOR_AGE)
    blood_group: BloodGroup
    phone: str = Field(min_length=1)
    email: Optional[str] = None
    location: str = Field(min_length=1)

class DonorRegistered(ApiModel):
    message: str = "Donor registered"
    donor: Donor
