import httpx
import logging
from typing import Any, Dict, Optional

from trip_planner.config import settings

logger = logging.getLogger(__name__)

# Only these fields are billed and returned
FIELD_MASK = ",".join([
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.rating",
    "places.userRatingCount",
    "places.googleMapsUri",
    "places.photos",
    "places.priceLevel",
    "places.websiteUri",
])


class PlacesConfigurationError(Exception):
    pass


class PlacesUpstreamError(Exception):
    def __init__(self, status_code: int, details: Any):
        super().__init__(f"Places API returned {status_code}")
        self.status_code = status_code
        self.details = details


def build_text_query(query: str, location: Optional[str] = None) -> str:
    """e.g. "Hiking near Austin, TX" """
    if location:
        return f"{query} near {location}"
    return query


class PlacesService:
    def __init__(self, http: httpx.AsyncClient, api_key: Optional[str] = None):
        self.http = http
        self.api_key = api_key

    async def search_text(self, query: str, location: Optional[str] = None) -> Dict[str, Any]:
        """Forward a text search to Google Places. Returns the upstream body as-is."""
        if not self.api_key:
            raise PlacesConfigurationError("Missing API Key")

        response = await self.http.post(
            settings.places_api_url,
            headers={
                "Content-Type": "application/json",
                "X-Goog-Api-Key": self.api_key,
                "X-Goog-FieldMask": FIELD_MASK,
            },
            json={
                "textQuery": build_text_query(query, location),
                "maxResultCount": settings.places_max_results,
            },
        )

        if response.is_error:
            try:
                details = response.json()
            except ValueError:
                details = response.text
            logger.error(f"Google Places API error ({response.status_code}): {details}")
            raise PlacesUpstreamError(response.status_code, details)

        return response.json()
