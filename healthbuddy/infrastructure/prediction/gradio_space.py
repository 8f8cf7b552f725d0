import logging
from typing import List

from gradio_client import Client

from healthbuddy.infrastructure.config import Settings


logger = logging.getLogger(__name__)


PREDICT_API_NAME = "/predict_disease_interface"


class HealthBuddySpaceAdapter:
    """Calls the hosted disease prediction Space and returns its text outputs."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.space = self.settings.healthbuddy_space

    def _connect(self) -> Client:
        return Client(
            self.space,
            httpx_kwargs={"timeout": self.settings.http_timeout},
            verbose=False,
        )

    def predict(self, problem_text: str, latitude: float, longitude: float) -> List[str]:
        try:
            client = self._connect()
            result = client.predict(
                problem_text=problem_text,
                latitude=latitude,
                longitude=longitude,
                api_name=PREDICT_API_NAME,
            )
        except Exception as e:
            logger.exception("HealthBuddy Space call failed: %s", e)
            raise

        if not isinstance(result, (list, tuple)):
            result = [result]
        logger.info("HealthBuddy Space returned %d segments", len(result))
        return list(result)
