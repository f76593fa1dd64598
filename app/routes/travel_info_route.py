from fastapi import APIRouter, HTTPException, Depends
from app.config.settings import Settings
from app.database.connection import get_settings, get_storage
from app.database.storage import MemStorage
from app.models.travel import CulturalInfo, GeocodeResult, Soundtrack, TransportationInfo, WeatherReport
from app.services.geocoding_service import GeocodingService, get_geocoding_service
from app.services import travel_info_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/weather/{location}", response_model=WeatherReport)
def get_weather(location: str, storage: MemStorage = Depends(get_storage),
                app_settings: Settings = Depends(get_settings)):
    return travel_info_service.get_weather(location, storage, app_settings.WEATHER_CACHE_TTL_SECONDS)


@router.get("/cultural-info/{location}", response_model=CulturalInfo)
def get_cultural_info(location: str):
    return travel_info_service.get_cultural_info(location)


@router.get("/transportation/{location}", response_model=TransportationInfo)
def get_transportation(location: str):
    return travel_info_service.get_transportation(location)


@router.get("/soundtrack/{location}", response_model=Soundtrack)
def get_soundtrack(location: str):
    return travel_info_service.get_soundtrack(location)


@router.get("/geocode/{location}", response_model=GeocodeResult)
def geocode_location(location: str, geocoder: GeocodingService = Depends(get_geocoding_service)):
    result = geocoder.geocode(location)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Could not find location: {location}")
    return result
