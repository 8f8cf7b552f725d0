from typing import Any, List, Optional
from pydantic import BaseModel

from healthbuddy.domain.models import DoctorRecord, ExtractedDoctor


class LookupResponse(BaseModel):
    specialization: str
    doctors: List[DoctorRecord]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class PredictionView(BaseModel):
    segments: List[str]
    condition_summary: str = ""
    specialist_line: str = ""
    doctors: List[ExtractedDoctor] = []
    error: Optional[str] = None
