from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str


class Location(BaseModel):
    latitude: float
    longitude: float


class SunriseSunset(BaseModel):
    sunrise: str
    sunset: str


class HelloRequest(BaseModel):
    name: str


class LocationRequest(BaseModel):
    address: str


class HelloResponse(BaseModel):
    greetings: str
    quote: str


class LocationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    geographic_coordinates: Location = Field(alias="geographicCoordinates")
    sunrise_sunset: SunriseSunset = Field(alias="sunriseSunset")


class ErrorResponse(BaseModel):
    error: str
