from pydantic import Field
from typing import Any, Dict, List, Literal
from datetime import datetime
from app.models.base import CamelModel

WeatherCondition = Literal["Clear", "Cloudy", "Rain", "Snow"]

class TravelRecommendation(CamelModel):
    activity: str
    reason: str
    best_time: str

class WeatherReport(CamelModel):
    temperature: int = Field(ge=0, le=30)
    condition: WeatherCondition
    humidity: int = Field(ge=0, le=100)
    wind_speed: int = Field(ge=0, le=30)
    icon: str
    recommendations: List[TravelRecommendation] = []

class WeatherCacheEntry(CamelModel):
    id: int
    location: str
    data: Dict[str, Any]
    updated_at: datetime

class CulturalInfo(CamelModel):
    languages: List[str]
    festivals: List[str]
    customs: str
    etiquette: List[str]

class FlightOption(CamelModel):
    airline: str
    departure: str
    arrival: str
    price: int
    duration: str

class TrainOption(CamelModel):
    operator: str
    departure: str
    arrival: str
    price: int
    duration: str

class TransportationInfo(CamelModel):
    flights: List[FlightOption]
    trains: List[TrainOption]

class GeocodeResult(CamelModel):
    location: str
    lat: float
    lon: float
    display_name: str

class ImageRequest(CamelModel):
    location: str = Field(min_length=1)

class ImageResponse(CamelModel):
    image_url: str

class SoundtrackTrack(CamelModel):
    title: str
    artist: str

class Soundtrack(CamelModel):
    genres: List[str]
    cultural_context: str
    recommendations: List[SoundtrackTrack]
