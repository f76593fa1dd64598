import requests, logging
from fastapi import Request
from typing import Optional
from app.models.travel import GeocodeResult

logger = logging.getLogger(__name__)

class GeocodingService:
    """
    Convert a place name to coordinates for the map panel.
    Uses OpenRouteService when an API key is configured, Nominatim otherwise.
    Returns None if the place cannot be found.
    """

    def __init__(self, nominatim_url: str, openroute_url: str,
                 openroute_api_key: Optional[str] = None, timeout: float = 10):
        self.nominatim_url = nominatim_url
        self.openroute_url = openroute_url
        self.openroute_api_key = openroute_api_key
        self.timeout = timeout

    def geocode(self, place_name: str) -> Optional[GeocodeResult]:
        if self.openroute_api_key:
            return self._geocode_openroute(place_name)
        return self._geocode_nominatim(place_name)

    def _geocode_nominatim(self, place_name: str) -> Optional[GeocodeResult]:
        try:
            response = requests.get(
                self.nominatim_url,
                params={
                    "q": place_name,
                    "format": "json",
                    "limit": 1
                },
                headers={
                    "User-Agent": "TravelAssistant/1.0"
                },
                timeout=self.timeout
            )

            if response.status_code == 200:
                results = response.json()
                if results:
                    result = GeocodeResult(
                        location=place_name,
                        lat=float(results[0]['lat']),
                        lon=float(results[0]['lon']),
                        display_name=results[0].get('display_name', place_name),
                    )
                    logger.info(f"Geocoded '{place_name}': ({result.lat}, {result.lon})")
                    return result

            logger.error(f"GeocodingService: Could not geocode '{place_name}'")
            return None

        except Exception as e:
            logger.error(f"GeocodingService: Geocoding error: {e}")
            return None

    def _geocode_openroute(self, place_name: str) -> Optional[GeocodeResult]:
        try:
            response = requests.get(
                self.openroute_url,
                params={
                    "api_key": self.openroute_api_key,
                    "text": place_name,
                    "size": 1
                },
                timeout=self.timeout
            )

            if response.status_code == 200:
                features = response.json().get('features', [])
                if features:
                    lon, lat = features[0]['geometry']['coordinates'][:2]
                    result = GeocodeResult(
                        location=place_name,
                        lat=float(lat),
                        lon=float(lon),
                        display_name=features[0].get('properties', {}).get('label', place_name),
                    )
                    logger.info(f"Geocoded '{place_name}' via OpenRouteService: ({result.lat}, {result.lon})")
                    return result

            logger.error(f"GeocodingService: OpenRouteService could not geocode '{place_name}'")
            return None

        except Exception as e:
            logger.error(f"GeocodingService: OpenRouteService error: {e}")
            return None

def get_geocoding_service(request: Request) -> GeocodingService:
    return request.app.state.geocoding_service
