from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import CamelModel, PayloadModel, reject_null

GenderValue = Literal["male", "female", "other"]


class PatientCreate(PayloadModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: date
    gender: GenderValue
    phone_number: str = Field(min_length=1, max_length=50)
    email: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    insurance_provider: Optional[str] = None
    policy_number: Optional[str] = None


class PatientUpdate(PayloadModel):
    """Partial update: only the fields present in the body are applied."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[GenderValue] = None
    phone_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    insurance_provider: Optional[str] = None
    policy_number: Optional[str] = None

    @field_validator("first_name", "last_name", "date_of_birth", "gender", "phone_number", mode="before")
    @classmethod
    def _required_stays_set(cls, value):
        return reject_null(value)


class PatientRecord(CamelModel):
    id: int
    first_name: str
    last_name: str
    date_of_birth: date
    gender: GenderValue
    phone_number: str
    email: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[str] = None
    emergency_contact: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    insurance_provider: Optional[str] = None
    policy_number: Optional[str] = None
    created_at: datetime
