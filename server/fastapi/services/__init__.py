from .quote import QuoteService
from .location import LocationService
from .sunrise_sunset import SunriseSunsetService

__all__ = ["QuoteService", "LocationService", "SunriseSunsetService"]
