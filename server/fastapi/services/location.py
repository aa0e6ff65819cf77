"""
Location Service

Resolves an address to coordinates using the Google Geocoding API.
Endpoint comes from GEOCODE_ENDPOINT; GEOCODE_API_KEY is appended when set.
"""

from urllib.parse import quote_plus

import httpx
import structlog

from errors import GetLocationError, LocationNotFoundError
from models import Location

log = structlog.get_logger(__name__)

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
ERROR_GETTING_LOCATION = "error getting location"


class LocationService:
    def __init__(self, http_client: httpx.AsyncClient, endpoint: str, api_key: str | None = None):
        self.http_client = http_client
        self.endpoint = endpoint
        self.api_key = api_key

    def build_url(self, address: str) -> str:
        url = f"{self.endpoint}?address={quote_plus(address)}"
        if self.api_key:
            url += f"&key={quote_plus(self.api_key)}"
        return url

    async def get(self, url: str) -> dict:
        """GET the geocoding url and return the decoded JSON body."""
        log.debug("geocode_request", url=url)
        try:
            response = await self.http_client.get(url)
        except httpx.HTTPError as e:
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: {e}") from e

        if response.status_code != 200:
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: {response.status_code} - {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: invalid JSON payload") from e

        if not isinstance(data, dict):
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: unexpected payload")
        return data

    def create_result(self, address: str, data: dict) -> Location:
        status = data.get("status")
        results = data.get("results") or []

        if status == STATUS_ZERO_RESULTS or (status == STATUS_OK and not results):
            raise LocationNotFoundError(address)

        if status != STATUS_OK:
            message = data.get("error_message") or f"status {status}"
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: {message}")

        try:
            coordinates = results[0]["geometry"]["location"]
            return Location(latitude=float(coordinates["lat"]), longitude=float(coordinates["lng"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: malformed result") from e

    async def from_address(self, address: str) -> Location:
        """Geocode an address.

        Raises LocationNotFoundError when the geocoder has no match and
        GetLocationError for any other failure.
        """
        try:
            data = await self.get(self.build_url(address))
            location = self.create_result(address, data)
        except LocationNotFoundError:
            log.info("address_not_found", address=address)
            raise
        except GetLocationError as e:
            log.warning("geocode_failed", address=address, error=e.message)
            raise
        except Exception as e:
            log.warning("geocode_failed", address=address, error=str(e))
            raise GetLocationError(f"{ERROR_GETTING_LOCATION}: {e}") from e

        log.debug("geocode_resolved", address=address, latitude=location.latitude, longitude=location.longitude)
        return location
