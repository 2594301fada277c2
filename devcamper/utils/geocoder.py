import logging
from dataclasses import dataclass
from typing import Optional

import requests

from devcamper.config import GEOCODER_API_KEY, GEOCODER_URL
from devcamper.utils.errorResponse import UpstreamFailure

logger = logging.getLogger(__name__)


@dataclass
class GeoLocation:
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None


class Geocoder:
    """MapQuest address lookup. ``geocode`` returns the best match only."""

    def __init__(self, api_key: Optional[str] = GEOCODER_API_KEY, url: str = GEOCODER_URL, timeout: int = 10):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def geocode(self, address: str) -> GeoLocation:
        if not self.api_key:
            raise UpstreamFailure("Geocoder is not configured")

        try:
            response = requests.get(
                self.url,
                params={"key": self.api_key, "location": address},
                timeout=self.timeout,
            )
            response.raise_for_status()
            locations = response.json()["results"][0]["locations"]
        except (requests.RequestException, KeyError, IndexError, ValueError) as e:
            logger.error(f"Geocoding failed for {address!r}: {e}")
            raise UpstreamFailure(f"Could not geocode address {address}")

        if not locations:
            raise UpstreamFailure(f"Could not geocode address {address}")

        best = locations[0]
        parts = [
            best.get("street"),
            best.get("adminArea5"),
            " ".join(p for p in (best.get("adminArea3"), best.get("postalCode")) if p),
            best.get("adminArea1"),
        ]
        return GeoLocation(
            latitude=best["latLng"]["lat"],
            longitude=best["latLng"]["lng"],
            formatted_address=", ".join(p for p in parts if p),
            street=best.get("street"),
            city=best.get("adminArea5"),
            state=best.get("adminArea3"),
            zipcode=best.get("postalCode"),
            country=best.get("adminArea1"),
        )


def get_geocoder() -> Geocoder:
    return Geocoder()
