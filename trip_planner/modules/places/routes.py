import httpx
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from trip_planner.config import settings
from trip_planner.modules.places.schemas import PlacesSearchRequest
from trip_planner.modules.places.service import (
    PlacesConfigurationError, PlacesService, PlacesUpstreamError
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["places"])


async def get_places_http_client():
    async with httpx.AsyncClient(timeout=settings.places_timeout_seconds) as client:
        yield client


def get_places_service(http: httpx.AsyncClient = Depends(get_places_http_client)) -> PlacesService:
    return PlacesService(http, settings.google_maps_api_key)


def _missing_key_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Server configuration error: Missing API Key"}
    )


@router.post("/places")
async def search_places(
    request: Request,
    service: PlacesService = Depends(get_places_service)
):
    """Search places by text, optionally near a location. Body: {query, location?}"""
    if not service.api_key:
        return _missing_key_response()

    try:
        payload = PlacesSearchRequest.model_validate(await request.json())
    except ValidationError:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})
    except Exception as e:
        logger.error(f"Places route error: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    if not payload.query:
        return JSONResponse(status_code=400, content={"error": "Missing query parameter"})

    try:
        return await service.search_text(payload.query, payload.location)
    except PlacesConfigurationError:
        return _missing_key_response()
    except PlacesUpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "Failed to fetch places", "details": e.details}
        )
    except Exception as e:
        logger.exception(f"Places route error: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
