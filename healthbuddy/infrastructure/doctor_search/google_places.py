import logging
from typing import Optional

import httpx

from healthbuddy.application.ports import PlacesPort
from healthbuddy.application.use_cases import UpstreamStatusError
from healthbuddy.infrastructure.config import Settings


logger = logging.getLogger(__name__)


NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"

SEARCH_RADIUS_METERS = 5000
PLACE_TYPE = "doctor"

# Only these attributes are billed and returned by Place Details.
DETAIL_FIELDS = ",".join([
    "place_id",
    "name",
    "vicinity",
    "formatted_phone_number",
    "website",
    "rating",
    "user_ratings_total",
    "geometry/location",
    "opening_hours",
])


class GooglePlacesDoctorSearchAdapter(PlacesPort):
    def __init__(
        self,
        settings: Settings | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or Settings()
        self.api_key = self.settings.google_places_api_key
        self.timeout = self.settings.http_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def nearby_search(self, lat: float, lng: float, keyword: str) -> dict:
        if not self.api_key:
            logger.warning("Google Places API key missing; request will be rejected upstream.")

        params = {
            "location": f"{lat},{lng}",
            "radius": SEARCH_RADIUS_METERS,
            "keyword": keyword,
            "type": PLACE_TYPE,
            "key": self.api_key or "",
        }
        try:
            async with self._client() as client:
                resp = await client.get(NEARBY_SEARCH_URL, params=params)
                resp.raise_for_status()
                return resp.json()
        except Exception as e:
            logger.exception("Places Nearby Search failed: %s", e)
            raise

    async def place_details(self, place_id: str) -> dict:
        params = {
            "place_id": place_id,
            "fields": DETAIL_FIELDS,
            "key": self.api_key or "",
        }
        try:
            async with self._client() as client:
                resp = await client.get(DETAILS_URL, params=params)
                resp.raise_for_status()
                data = resp.json()
        except Exception as e:
            logger.exception("Places Details failed for %s: %s", place_id, e)
            raise

        # Google reports quota, auth and lookup failures as HTTP 200 with a status.
        status = data.get("status")
        result = data.get("result")
        if status != "OK" or not result:
            logger.error("Place Details for %s failed with status %s: %s", place_id, status, data)
            raise UpstreamStatusError("Google Places API (Place Details) failed", details=data)
        return result
