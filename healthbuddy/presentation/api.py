import logging
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from healthbuddy.application.schemas import ErrorResponse
from healthbuddy.application.use_cases import (
    DoctorLookupUseCase,
    MissingFieldsError,
    UpstreamError,
)
from healthbuddy.domain.models import LookupRequest
from healthbuddy.domain.rules import validate_lookup_payload
from healthbuddy.infrastructure.config import Settings
from healthbuddy.infrastructure.doctor_search.google_places import GooglePlacesDoctorSearchAdapter
from healthbuddy.infrastructure.llm.mistral_client import MistralLLMAdapter


logger = logging.getLogger(__name__)


GENERIC_UPSTREAM_ERROR = "Mistral or Google API error occurred."


def error_details(exc: Exception) -> Any:
    """Best available diagnostic for an upstream failure: its response body, else its message."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            return response.json()
        except ValueError:
            return response.text or str(exc)
    body = getattr(exc, "body", None)
    if body:
        return body
    return str(exc)


def build_lookup_use_case(settings: Settings) -> DoctorLookupUseCase:
    return DoctorLookupUseCase(
        llm=MistralLLMAdapter(settings=settings),
        places=GooglePlacesDoctorSearchAdapter(settings=settings),
    )


def create_app(
    settings: Optional[Settings] = None,
    lookup: Optional[DoctorLookupUseCase] = None,
) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="HealthBuddy Doctor Finder",
        version="0.1.0",
        description="Classifies symptoms into a specialization and lists nearby doctors",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.lookup = lookup or build_lookup_use_case(settings)

    @app.exception_handler(MissingFieldsError)
    async def missing_fields_handler(request: Request, exc: MissingFieldsError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=exc.message).model_dump(exclude_none=True),
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "details": exc.details},
        )

    @app.get("/", tags=["root"], summary="Health check")
    async def root():
        return {"status": "ok", "service": "HealthBuddy Doctor Finder"}

    @app.post("/api/find-doctor", tags=["doctors"], summary="Find nearby doctors for symptoms")
    async def find_doctor(request: Request):
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        is_valid, message = validate_lookup_payload(payload)
        if not is_valid:
            raise MissingFieldsError(message)
        try:
            lookup_request = LookupRequest.model_validate(payload)
        except ValidationError:
            raise MissingFieldsError()

        try:
            result = await request.app.state.lookup.lookup(lookup_request)
        except UpstreamError:
            raise
        except Exception as e:
            details = error_details(e)
            logger.exception("Doctor lookup failed: %s", details)
            raise UpstreamError(GENERIC_UPSTREAM_ERROR, details=details) from e

        return JSONResponse(content=result.model_dump(mode="json", exclude_unset=True))

    return app


app = create_app()


def main():
    settings = app.state.settings
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
