import asyncio
import logging
from typing import Any, List, Optional

from healthbuddy.application.extraction import extract_doctors, specialist_line, strip_bold
from healthbuddy.application.ports import (
    DiseasePredictorPort,
    DoctorProseParser,
    LLMPort,
    PlacesPort,
)
from healthbuddy.application.schemas import LookupResponse, PredictionView
from healthbuddy.domain.models import DoctorRecord, Location, LookupRequest
from healthbuddy.domain.rules import MISSING_FIELDS_MESSAGE


logger = logging.getLogger(__name__)


CLASSIFICATION_INSTRUCTION = (
    "Which type of doctor should a patient visit for the following symptoms? "
    "Respond with only one specialization (like physician, ENT, neurologist, "
    "cardiologist, orthopedic, gynecologist, dermatologist)."
)

# ZERO_RESULTS is Google's status for an empty but successful search.
SEARCH_OK_STATUSES = {"OK", "ZERO_RESULTS"}

AI_SERVER_ERROR = "Error contacting AI server"
CONDITION_SEGMENT = 2
SPECIALIST_SEGMENT = 3


class DoctorLookupError(Exception):
    """Base class for failures surfaced by the doctor lookup endpoint."""


class MissingFieldsError(DoctorLookupError):
    def __init__(self, message: str = MISSING_FIELDS_MESSAGE):
        super().__init__(message)
        self.message = message


class UpstreamError(DoctorLookupError):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class UpstreamStatusError(UpstreamError):
    """A Places call answered with a status other than OK."""


def build_classification_prompt(symptoms: str) -> str:
    return f"{CLASSIFICATION_INSTRUCTION}\nSymptoms: {symptoms}"


def assemble_doctor(candidate: dict, detail: dict) -> DoctorRecord:
    """Merge a search candidate with its Place Details result.

    Optional contact fields become None when absent. Rating, name, address and
    location are only set when the upstream sent them, so they drop out of an
    ``exclude_unset`` dump instead of being synthesized.
    """
    fields = {
        "place_id": detail.get("place_id") or candidate.get("place_id"),
        "phone": detail.get("formatted_phone_number") or None,
        "website": detail.get("website") or None,
        "opening_hours": detail.get("opening_hours"),
    }
    if "name" in detail:
        fields["name"] = detail["name"]
    if "vicinity" in detail:
        fields["address"] = detail["vicinity"]
    if "rating" in detail:
        fields["rating"] = detail["rating"]
    if "user_ratings_total" in detail:
        fields["total_ratings"] = detail["user_ratings_total"]

    location = (detail.get("geometry") or {}).get("location")
    if location:
        fields["location"] = Location(**location)

    return DoctorRecord(**fields)


class DoctorLookupUseCase:
    def __init__(self, llm: LLMPort, places: PlacesPort):
        self.llm = llm
        self.places = places

    async def classify(self, symptoms: str) -> str:
        raw = await self.llm.generate_text(build_classification_prompt(symptoms))
        return (raw or "").strip()

    async def find_candidates(self, lat: float, lng: float, specialization: str) -> List[dict]:
        payload = await self.places.nearby_search(lat, lng, f"doctor {specialization}")
        status = payload.get("status")
        if status not in SEARCH_OK_STATUSES:
            logger.error("Nearby Search failed with status %s: %s", status, payload)
            raise UpstreamStatusError(
                "Google Places API (Nearby Search) failed", details=payload
            )
        return payload.get("results") or []

    async def fetch_details(self, candidates: List[dict]) -> List[dict]:
        # Every request runs to completion; one failure fails the whole batch.
        results = await asyncio.gather(
            *(self.places.place_details(c.get("place_id")) for c in candidates),
            return_exceptions=True,
        )

        failures = [
            (candidate, result)
            for candidate, result in zip(candidates, results)
            if isinstance(result, BaseException)
        ]
        for candidate, exc in failures:
            logger.error("Place details failed for %s: %s", candidate.get("place_id"), exc)
        if failures:
            raise failures[0][1]

        return list(results)

    async def lookup(self, request: LookupRequest) -> LookupResponse:
        logger.info("Symptoms received: %s", request.symptoms)

        specialization = await self.classify(request.symptoms)
        logger.info("Specialization: %s", specialization)

        candidates = await self.find_candidates(request.lat, request.lng, specialization)
        if not candidates:
            return LookupResponse(specialization=specialization, doctors=[])

        details = await self.fetch_details(candidates)
        doctors = [
            assemble_doctor(candidate, detail)
            for candidate, detail in zip(candidates, details)
        ]
        return LookupResponse(specialization=specialization, doctors=doctors)


def build_prediction_view(
    segments: List[str], parser: Optional[DoctorProseParser] = None
) -> PredictionView:
    if len(segments) <= SPECIALIST_SEGMENT:
        error = segments[0] if segments else AI_SERVER_ERROR
        return PredictionView(segments=segments, error=error)

    specialist_text = segments[SPECIALIST_SEGMENT]
    return PredictionView(
        segments=segments,
        condition_summary=strip_bold(segments[CONDITION_SEGMENT]),
        specialist_line=specialist_line(specialist_text),
        doctors=extract_doctors(specialist_text, parser),
    )


class DiseasePredictionUseCase:
    def __init__(self, predictor: DiseasePredictorPort, parser: Optional[DoctorProseParser] = None):
        self.predictor = predictor
        self.parser = parser

    def predict(self, problem_text: str, latitude: float, longitude: float) -> PredictionView:
        try:
            raw = self.predictor.predict(problem_text, latitude, longitude)
            segments = ["" if s is None else str(s) for s in raw]
        except Exception as e:
            logger.exception("Error calling disease prediction Space: %s", e)
            segments = [AI_SERVER_ERROR]

        return build_prediction_view(segments, self.parser)
