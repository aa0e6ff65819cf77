"""
Sunrise/Sunset Service

Looks up sunrise and sunset times for a location using the sunrise-sunset.org API.
Endpoint comes from SUNRISE_SUNSET_ENDPOINT.
"""

from decimal import Decimal

import httpx
import structlog

from errors import GetSunriseSunsetError
from models import Location, SunriseSunset

log = structlog.get_logger(__name__)

STATUS_OK = "OK"
ERROR_GETTING_DATA = "error getting sunrise and sunset"
RESULT_NOT_OK = "sunrise and sunset result was not OK"


def _decimal(value: float) -> str:
    """Shortest round-tripping digits of value, never in exponent notation."""
    return format(Decimal(repr(value)), "f")


class SunriseSunsetService:
    def __init__(self, http_client: httpx.AsyncClient, endpoint: str):
        self.http_client = http_client
        self.endpoint = endpoint

    def build_url(self, location: Location) -> str:
        return f"{self.endpoint}?lat={_decimal(location.latitude)}&lng={_decimal(location.longitude)}"

    async def get(self, url: str) -> dict:
        """GET the sunrise/sunset url and return the decoded JSON body."""
        log.debug("sunrise_sunset_request", url=url)
        response = await self.http_client.get(url)

        if response.status_code != 200:
            raise GetSunriseSunsetError(f"{ERROR_GETTING_DATA}: {response.status_code} - {response.text}")

        return response.json()

    def create_result(self, data) -> SunriseSunset:
        if not isinstance(data, dict) or data.get("status") != STATUS_OK:
            raise GetSunriseSunsetError(RESULT_NOT_OK)

        results = data.get("results") or {}
        sunrise = results.get("sunrise") if isinstance(results, dict) else None
        sunset = results.get("sunset") if isinstance(results, dict) else None
        if sunrise is None or sunset is None:
            raise GetSunriseSunsetError(RESULT_NOT_OK)

        return SunriseSunset(sunrise=str(sunrise), sunset=str(sunset))

    async def from_location(self, location: Location) -> SunriseSunset:
        """Fetch sunrise/sunset for a location; every failure becomes GetSunriseSunsetError."""
        try:
            data = await self.get(self.build_url(location))
        except GetSunriseSunsetError as e:
            log.warning("sunrise_sunset_failed", error=e.message)
            raise
        except Exception as e:
            log.warning("sunrise_sunset_failed", error=str(e))
            raise GetSunriseSunsetError(f"{ERROR_GETTING_DATA}: {e}") from e

        try:
            return self.create_result(data)
        except GetSunriseSunsetError as e:
            log.warning("sunrise_sunset_failed", error=e.message, status=data.get("status") if isinstance(data, dict) else None)
            raise
