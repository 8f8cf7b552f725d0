import logging
import re
from typing import Optional, Tuple

import requests
import streamlit as st

from healthbuddy.application.schemas import PredictionView
from healthbuddy.application.use_cases import DiseasePredictionUseCase
from healthbuddy.domain.models import ExtractedDoctor
from healthbuddy.infrastructure.config import Settings
from healthbuddy.infrastructure.prediction.gradio_space import HealthBuddySpaceAdapter


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** This is NOT medical advice and NOT a diagnosis. "
    "Doctor suggestions come from AI models and public map listings. "
    "If you experience emergency symptoms, seek immediate care (call local emergency number)."
)


def _tel_href(phone: str) -> str:
    return "tel:" + re.sub(r"\s+", "", phone)


def _maps_url(place_id: str) -> str:
    return f"https://www.google.com/maps/place/?q=place_id:{place_id}"


def _format_location(lat: float, lng: float) -> str:
    return f"🌎 Location: {lat:.4f}, {lng:.4f}"


def _format_lookup_doctor(doctor: dict) -> str:
    """Markdown card for one doctor returned by the lookup endpoint."""
    lines = [f"### {doctor.get('name') or 'Doctor'}"]
    if doctor.get("address"):
        lines.append(f"📍 {doctor['address']}")
    if doctor.get("rating") is not None:
        rating = f"⭐ {doctor['rating']}"
        if doctor.get("total_ratings"):
            rating += f" ({doctor['total_ratings']} reviews)"
        lines.append(rating)

    hours = doctor.get("opening_hours") or {}
    if "open_now" in hours:
        lines.append("🟢 Open now" if hours["open_now"] else "🔴 Closed now")

    links = []
    if doctor.get("phone"):
        links.append(f"[📞 Call]({_tel_href(doctor['phone'])})")
    if doctor.get("website"):
        links.append(f"[🌐 Website]({doctor['website'].strip()})")
    if doctor.get("place_id"):
        links.append(f"[🗺️ Maps]({_maps_url(doctor['place_id'])})")
    if links:
        lines.append(" · ".join(links))

    return "\n\n".join(lines)


def _format_extracted_doctor(doctor: ExtractedDoctor) -> str:
    lines = [f"### {doctor.name}"]
    if doctor.address:
        lines.append(doctor.address)
    if doctor.rating:
        lines.append(f"⭐ {doctor.rating}")

    links = []
    if doctor.phone:
        links.append(f"[📞 Call]({_tel_href(doctor.phone)})")
    if doctor.website:
        links.append(f"[🌐 Website]({doctor.website.strip()})")
    if links:
        lines.append(" · ".join(links))

    return "\n\n".join(lines)


def _call_lookup_api(url: str, symptoms: str, lat: float, lng: float, timeout: float) -> Tuple[int, dict]:
    resp = requests.post(
        url,
        json={"symptoms": symptoms, "lat": lat, "lng": lng},
        timeout=timeout,
    )
    try:
        body = resp.json()
    except ValueError:
        body = {"error": resp.text}
    return resp.status_code, body


def _check_inputs(text: str, location: Optional[Tuple[float, float]]) -> bool:
    if not text.strip():
        st.warning("Please enter your symptoms!")
        return False
    if location is None:
        st.error("Please allow location access: enter your latitude and longitude in the sidebar.")
        return False
    return True


def _render_sidebar(settings: Settings) -> Optional[Tuple[float, float]]:
    st.sidebar.title("⚙️ Settings")

    st.sidebar.markdown("### 📍 Your Location")
    lat = st.sidebar.number_input("Latitude", min_value=-90.0, max_value=90.0, value=None, format="%.6f")
    lng = st.sidebar.number_input("Longitude", min_value=-180.0, max_value=180.0, value=None, format="%.6f")

    st.sidebar.divider()
    st.sidebar.caption(f"**Lookup API:** {settings.lookup_api_url}")
    st.sidebar.caption(f"**Prediction Space:** {settings.healthbuddy_space}")

    if lat is None or lng is None:
        return None
    return lat, lng


def _render_doctor_finder(settings: Settings, location: Optional[Tuple[float, float]]):
    symptoms = st.text_area(
        "Describe your symptoms",
        placeholder="e.g. chest pain, fever, cough",
        key="finder_symptoms",
    )
    if not st.button("🔎 Find Doctors", key="finder_submit", use_container_width=True):
        return
    if not _check_inputs(symptoms, location):
        return

    with st.spinner("🧠 Analyzing your symptoms..."):
        try:
            status, body = _call_lookup_api(
                settings.lookup_api_url, symptoms, location[0], location[1], settings.http_timeout
            )
        except requests.RequestException as e:
            logger.exception("Lookup API call failed: %s", e)
            st.error(f"❌ Could not reach the lookup API: {e}")
            return

    if status != 200:
        st.error(f"❌ Lookup failed (HTTP {status}): {body.get('error', 'unknown error')}")
        if body.get("details"):
            st.json(body["details"])
        return

    st.success(f"👨‍⚕️ Recommended specialization: **{body.get('specialization', '')}**")
    doctors = body.get("doctors") or []
    if not doctors:
        st.info("No doctors found nearby 😢")
        return
    for doctor in doctors:
        with st.container(border=True):
            st.markdown(_format_lookup_doctor(doctor))


def _render_prediction(view: PredictionView):
    if view.error:
        st.error(view.error)
        return

    st.markdown("## 🧠 Predicted Condition")
    st.info(view.condition_summary)
    if view.specialist_line:
        st.markdown(view.specialist_line)

    st.markdown("## 👨‍⚕️ Recommended Doctors")
    if not view.doctors:
        st.write("No doctor data found 😢")
        return
    cols = st.columns(2)
    for idx, doctor in enumerate(view.doctors):
        with cols[idx % 2]:
            with st.container(border=True):
                st.markdown(_format_extracted_doctor(doctor))


def _render_disease_predictor(settings: Settings, location: Optional[Tuple[float, float]]):
    problem_text = st.text_area(
        "Describe your health issue",
        placeholder="Describe your health issue (e.g. chest pain, fever, cough)...",
        key="predictor_text",
    )
    if not st.button("🩺 Predict & Find Doctors", key="predictor_submit", use_container_width=True):
        return
    if not _check_inputs(problem_text, location):
        return

    usecase = DiseasePredictionUseCase(predictor=HealthBuddySpaceAdapter(settings=settings))
    with st.spinner("🧠 Analyzing your symptoms..."):
        view = usecase.predict(problem_text, location[0], location[1])
    _render_prediction(view)


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="HealthBuddy",
        page_icon="🩺",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    location = _render_sidebar(settings)

    st.markdown("# 🩺 HealthBuddy: Doctor Finder AI")
    st.info(DISCLAIMER)
    if location:
        st.caption(_format_location(*location))

    finder_tab, predictor_tab = st.tabs(["🔎 Doctor Finder", "🧠 Disease Predictor"])
    with finder_tab:
        _render_doctor_finder(settings, location)
    with predictor_tab:
        _render_disease_predictor(settings, location)

    st.caption("Powered by Mistral, Google Places & 🤗 Hugging Face Gradio")


if __name__ == "__main__":
    main()
