from typing import List, Protocol
from healthbuddy.domain.models import ExtractedDoctor


class LLMPort(Protocol):
    async def generate_text(self, prompt: str) -> str:
        """
        Sends a single user prompt and returns the model's free-text reply.
        """
        ...


class PlacesPort(Protocol):
    async def nearby_search(self, lat: float, lng: float, keyword: str) -> dict:
        """
        Returns the raw Nearby Search payload, including its ``status`` field.
        """
        ...

    async def place_details(self, place_id: str) -> dict:
        """
        Returns the ``result`` object of a Place Details payload.
        """
        ...


class DiseasePredictorPort(Protocol):
    def predict(self, problem_text: str, latitude: float, longitude: float) -> List[str]:
        ...


class DoctorProseParser(Protocol):
    def parse(self, text: str) -> List[ExtractedDoctor]:
        ...
