from contextlib import asynccontextmanager
from typing import Annotated

import httpx
import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from errors import register_error_handlers
from logs import setup_logging
from models import (
    ErrorResponse,
    HelloRequest,
    HelloResponse,
    LocationRequest,
    LocationResponse,
    Quote,
)
from services import LocationService, QuoteService, SunriseSunsetService

DEFAULT_NAME = "world"

settings = get_settings()
setup_logging(settings.log_level)
log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One HTTP client (and connection pool) shared by every upstream service
    async with httpx.AsyncClient(timeout=settings.http_timeout) as http_client:
        app.state.quote_service = QuoteService(http_client, settings.quote_endpoint)
        app.state.location_service = LocationService(
            http_client, settings.geocode_endpoint, settings.geocode_api_key
        )
        app.state.sunrise_sunset_service = SunriseSunsetService(
            http_client, settings.sunrise_sunset_endpoint
        )
        log.info("startup", quote_endpoint=settings.quote_endpoint)
        yield
    log.info("shutdown")


app = FastAPI(
    title="Greeting API",
    description="Greetings with quotes, and sunrise/sunset times for an address",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# --- Dependencies ---


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service


def get_sunrise_sunset_service(request: Request) -> SunriseSunsetService:
    return request.app.state.sunrise_sunset_service


QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
SunriseSunsetServiceDep = Annotated[SunriseSunsetService, Depends(get_sunrise_sunset_service)]


# --- Helpers ---


def combine_greeting_and_quote(name: str, quote: Quote) -> HelloResponse:
    return HelloResponse(greetings=name, quote=quote.content)


async def create_hello_response(name: str, quote_service: QuoteService) -> HelloResponse:
    quote = await quote_service.get()
    return combine_greeting_and_quote(name, quote)


async def create_location_response(
    address: str,
    location_service: LocationService,
    sunrise_sunset_service: SunriseSunsetService,
) -> LocationResponse:
    """Geocode the address, then look up sunrise/sunset for the result.

    The second call only happens once the first one succeeded; errors from
    either propagate to the registered error handlers.
    """
    location = await location_service.from_address(address)
    sunrise_sunset = await sunrise_sunset_service.from_location(location)
    return LocationResponse(geographic_coordinates=location, sunrise_sunset=sunrise_sunset)


ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Address not found"},
    500: {"model": ErrorResponse, "description": "Upstream failure"},
}


# --- Endpoints ---


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/hello", response_model=HelloResponse, responses={500: ERROR_RESPONSES[500]})
async def default_hello(quote_service: QuoteServiceDep):
    return await create_hello_response(DEFAULT_NAME, quote_service)


@app.get("/hello/{name}", response_model=HelloResponse, responses={500: ERROR_RESPONSES[500]})
async def get_hello(name: str, quote_service: QuoteServiceDep):
    return await create_hello_response(name, quote_service)


@app.post("/hello", response_model=HelloResponse, responses={500: ERROR_RESPONSES[500]})
async def post_hello(request: HelloRequest, quote_service: QuoteServiceDep):
    return await create_hello_response(request.name, quote_service)


@app.get("/location/{address}", response_model=LocationResponse, responses=ERROR_RESPONSES)
async def get_location(
    address: str,
    location_service: LocationServiceDep,
    sunrise_sunset_service: SunriseSunsetServiceDep,
):
    return await create_location_response(address, location_service, sunrise_sunset_service)


@app.post("/location", response_model=LocationResponse, responses=ERROR_RESPONSES)
async def post_location(
    request: LocationRequest,
    location_service: LocationServiceDep,
    sunrise_sunset_service: SunriseSunsetServiceDep,
):
    return await create_location_response(request.address, location_service, sunrise_sunset_service)
