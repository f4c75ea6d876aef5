"""
Address geocoding via the Google Maps Geocoding API.

Usage:
    geocoder = GoogleGeocoder(api_key="...")
    coords = await geocoder.geocode("1600 Amphitheatre Parkway, Mountain View, CA")
    if coords:
        print(coords.latitude, coords.longitude)
"""

import logging
from typing import Optional

import httpx

from .base import Coordinates, Geocoder

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocoder(Geocoder):
    """Geocoder backed by the Google Maps Geocoding API.

    Any failure (no key, HTTP error, zero results) yields None; geocoding
    is an enrichment and never fails the caller.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def geocode(self, address: str) -> Optional[Coordinates]:
        if not self._api_key:
            logger.debug("Google Maps API key not configured, skipping geocoding")
            return None
        if not address or not address.strip():
            return None

        params = {"address": address, "key": self._api_key}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(GOOGLE_GEOCODE_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Geocoding request failed for '{address}': {e}")
            return None
        except ValueError as e:
            logger.warning(f"Geocoding returned malformed JSON for '{address}': {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Geocoding returned an unexpected payload for '{address}'")
            return None

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.warning(
                f"Geocoding failed for '{address}': status={status} "
                f"{data.get('error_message', '')}".rstrip()
            )
            return None

        try:
            location = results[0]["geometry"]["location"]
            coords = Coordinates(latitude=location["lat"], longitude=location["lng"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Geocoding returned an unusable result for '{address}': {e!r}")
            return None
        logger.info(f"Geocoded '{address}' to ({coords.latitude}, {coords.longitude})")
        return coords
