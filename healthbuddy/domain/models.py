from typing import Optional
from pydantic import BaseModel, field_validator


class LookupRequest(BaseModel):
    symptoms: str
    lat: float
    lng: float

    @field_validator("symptoms")
    @classmethod
    def validate_symptoms(cls, v: str):
        v = v.strip()
        if len(v) == 0:
            raise ValueError("symptoms must not be empty")
        return v


class Location(BaseModel):
    lat: float
    lng: float


class DoctorRecord(BaseModel):
    """A nearby doctor built from one Place Details payload.

    phone, website and opening_hours are always serialized (null when absent).
    The remaining fields are only serialized when the upstream sent them, so
    dump with ``exclude_unset=True``.
    """
    place_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[dict] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    location: Optional[Location] = None


class ExtractedDoctor(BaseModel):
    name: str = "Unknown Doctor"
    address: str = ""
    phone: str = ""
    rating: str = ""
    website: str = ""
