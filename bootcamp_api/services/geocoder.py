"""MapQuest geocoding for bootcamp addresses."""

from typing import Dict, Optional

import httpx
import structlog

from bootcamp_api.config import settings

logger = structlog.get_logger(__name__)


class GeocodingError(Exception):
    """The geocoding provider could not be reached or answered an error."""


class Geocoder:
    """Resolve a free-text address to coordinates."""

    def __init__(
        self,
        api_key: str,
        base_url: str = settings.GEOCODER_URL,
        timeout: float = settings.GEOCODER_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def geocode(self, address: str) -> Optional[Dict]:
        """
        Geocode an address.

        Returns:
            {"lat": float, "lng": float, "formatted_address": str, "country": str | None}
            or None when the provider has no match.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    self.base_url,
                    params={"key": self.api_key, "location": address, "maxResults": 1},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("geocoding_failed", error=str(e))
            raise GeocodingError(str(e)) from e

        results = data.get("results") or []
        locations = results[0].get("locations") if results else None
        if not locations:
            logger.warning("geocoding_no_match")
            return None

        match = locations[0]
        lat_lng = match.get("latLng") or {}
        if "lat" not in lat_lng or "lng" not in lat_lng:
            return None

        parts = [
            match.get("street"),
            match.get("adminArea5"),  # city
            match.get("adminArea3"),  # state
            match.get("postalCode"),
            match.get("adminArea1"),  # country
        ]
        return {
            "lat": lat_lng["lat"],
            "lng": lat_lng["lng"],
            "formatted_address": ", ".join(p for p in parts if p),
            "country": match.get("adminArea1"),
        }


_instance: Optional[Geocoder] = None


def get_geocoder() -> Optional[Geocoder]:
    """Dependency returning the geocoder, or None when no API key is configured."""
    global _instance
    if not settings.GEOCODER_API_KEY:
        return None
    if _instance is None:
        _instance = Geocoder(api_key=settings.GEOCODER_API_KEY)
    return _instance
