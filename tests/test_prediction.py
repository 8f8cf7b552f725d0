from unittest.mock import MagicMock

import pytest

from healthbuddy.application.use_cases import (
    AI_SERVER_ERROR,
    DiseasePredictionUseCase,
    build_prediction_view,
)
from healthbuddy.infrastructure.config import Settings
from healthbuddy.infrastructure.prediction import gradio_space
from healthbuddy.infrastructure.prediction.gradio_space import (
    PREDICT_API_NAME,
    HealthBuddySpaceAdapter,
)


SEGMENTS = [
    "chest pain",
    "12.9, 77.6",
    "**Possible condition:** Angina\nSee a doctor soon.",
    "**Recommended Specialist:** Cardiologist\n\n**1. Dr. Rao\n📍MG Road\n📞080 111 222\n⭐4.6",
]


class DummyPredictor:
    def __init__(self, segments=None, error=None):
        self.segments = segments if segments is not None else SEGMENTS
        self.error = error
        self.calls = []

    def predict(self, problem_text, latitude, longitude):
        self.calls.append((problem_text, latitude, longitude))
        if self.error:
            raise self.error
        return self.segments


class TestDiseasePredictionUseCase:
    def test_builds_view_from_fixed_positions(self):
        usecase = DiseasePredictionUseCase(predictor=DummyPredictor())
        view = usecase.predict("chest pain", 12.9, 77.6)

        assert view.error is None
        assert view.condition_summary == "Possible condition: Angina\nSee a doctor soon."
        assert view.specialist_line == "Specialist: Cardiologist"
        assert len(view.doctors) == 1
        assert view.doctors[0].name == "Dr. Rao"
        assert view.doctors[0].phone == "080 111 222"

    def test_remote_failure_becomes_error_segment(self):
        predictor = DummyPredictor(error=ConnectionError("space is sleeping"))
        view = DiseasePredictionUseCase(predictor=predictor).predict("fever", 1.0, 2.0)

        assert view.segments == [AI_SERVER_ERROR]
        assert view.error == AI_SERVER_ERROR
        assert view.doctors == []

    def test_passes_inputs_through(self):
        predictor = DummyPredictor()
        DiseasePredictionUseCase(predictor=predictor).predict("cough", 51.5, -0.12)
        assert predictor.calls == [("cough", 51.5, -0.12)]

    def test_none_segments_become_empty_strings(self):
        predictor = DummyPredictor(segments=[None, None, None, None])
        view = DiseasePredictionUseCase(predictor=predictor).predict("cough", 1.0, 1.0)
        assert view.segments == ["", "", "", ""]
        assert view.doctors == []


def test_short_segment_list_is_an_error():
    view = build_prediction_view(["Something unexpected"])
    assert view.error == "Something unexpected"


def test_empty_segment_list_is_an_error():
    assert build_prediction_view([]).error == AI_SERVER_ERROR


class TestHealthBuddySpaceAdapter:
    @pytest.fixture
    def fake_client(self, monkeypatch):
        client = MagicMock()
        client.predict.return_value = tuple(SEGMENTS)
        factory = MagicMock(return_value=client)
        monkeypatch.setattr(gradio_space, "Client", factory)
        return factory, client

    def test_predict_calls_named_endpoint(self, monkeypatch, fake_client):
        monkeypatch.setenv("HEALTHBUDDY_SPACE", "someone/space")
        factory, client = fake_client

        result = HealthBuddySpaceAdapter(settings=Settings()).predict("chest pain", 12.9, 77.6)

        assert result == SEGMENTS
        assert factory.call_args.args[0] == "someone/space"
        client.predict.assert_called_once_with(
            problem_text="chest pain",
            latitude=12.9,
            longitude=77.6,
            api_name=PREDICT_API_NAME,
        )

    def test_single_value_is_wrapped(self, fake_client):
        _, client = fake_client
        client.predict.return_value = "only text"
        assert HealthBuddySpaceAdapter(settings=Settings()).predict("x", 1.0, 1.0) == ["only text"]

    def test_errors_are_raised(self, fake_client):
        _, client = fake_client
        client.predict.side_effect = ValueError("bad input")
        with pytest.raises(ValueError):
            HealthBuddySpaceAdapter(settings=Settings()).predict("x", 1.0, 1.0)
