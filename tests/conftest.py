"""Shared fakes for the lookup pipeline."""
import asyncio

import pytest


class DummyLLM:
    def __init__(self, reply: str = "cardiologist\n", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class DummyPlaces:
    def __init__(self):
        self.search_payload = {"status": "ZERO_RESULTS", "results": []}
        self.details = {}
        self.delays = {}
        self.failures = {}
        self.search_calls = []
        self.detail_calls = []
        self.completed = []

    def with_places(self, *details):
        self.search_payload = {
            "status": "OK",
            "results": [{"place_id": d["place_id"], "name": d.get("name")} for d in details],
        }
        self.details = {d["place_id"]: d for d in details}
        return self

    async def nearby_search(self, lat, lng, keyword):
        self.search_calls.append((lat, lng, keyword))
        return self.search_payload

    async def place_details(self, place_id):
        self.detail_calls.append(place_id)
        await asyncio.sleep(self.delays.get(place_id, 0))
        self.completed.append(place_id)
        if place_id in self.failures:
            raise self.failures[place_id]
        return self.details[place_id]


@pytest.fixture
def llm():
    return DummyLLM()


@pytest.fixture
def places():
    return DummyPlaces()
