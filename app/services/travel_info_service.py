import random, logging
from typing import List, Optional
from datetime import datetime, timedelta
from app.database.storage import MemStorage
from app.models.travel import (
    CulturalInfo,
    FlightOption,
    Soundtrack,
    SoundtrackTrack,
    TrainOption,
    TransportationInfo,
    TravelRecommendation,
    WeatherReport,
)

logger = logging.getLogger(__name__)

WEATHER_CONDITIONS = ['Clear', 'Cloudy', 'Rain', 'Snow']

WEATHER_ICONS = {
    'Clear': '☀️',
    'Cloudy': '☁️',
    'Rain': '🌧️',
    'Snow': '❄️',
}

CONDITION_RECOMMENDATIONS = {
    'Clear': TravelRecommendation(
        activity="Outdoor Sightseeing",
        reason="Clear skies make it ideal for exploring landmarks on foot",
        best_time="Morning to late afternoon",
    ),
    'Cloudy': TravelRecommendation(
        activity="Walking Tours",
        reason="Mild, overcast weather is comfortable for long walks",
        best_time="Midday",
    ),
    'Rain': TravelRecommendation(
        activity="Museum Visits",
        reason="Indoor attractions keep you dry while you explore local culture",
        best_time="Any time during the day",
    ),
    'Snow': TravelRecommendation(
        activity="Winter Sports",
        reason="Fresh snow is perfect for skiing and snowshoeing",
        best_time="Early morning",
    ),
}

WATER_ACTIVITIES = TravelRecommendation(
    activity="Water Activities",
    reason="High temperatures are perfect for swimming and beach time",
    best_time="Late morning to afternoon",
)

def weather_recommendations(condition: str, temperature: int) -> List[TravelRecommendation]:
    recommendations = [CONDITION_RECOMMENDATIONS[condition]]
    if temperature > 25:
        recommendations.append(WATER_ACTIVITIES)
    return recommendations

def generate_weather() -> WeatherReport:
    temperature = random.randint(0, 30)
    condition = random.choice(WEATHER_CONDITIONS)
    return WeatherReport(
        temperature=temperature,
        condition=condition,
        humidity=random.randint(0, 100),
        wind_speed=random.randint(0, 30),
        icon=WEATHER_ICONS[condition],
        recommendations=weather_recommendations(condition, temperature),
    )

def get_weather(location: str, storage: Optional[MemStorage] = None, ttl_seconds: int = 0) -> WeatherReport:
    """
    Mock weather for a location. With a positive ttl_seconds and a store,
    a cached report younger than the TTL is reused.
    """
    if storage is not None and ttl_seconds > 0:
        cached = storage.get_weather_cache(location)
        if cached and datetime.now() - cached.updated_at < timedelta(seconds=ttl_seconds):
            logger.info(f"Weather cache hit for '{location}'")
            return WeatherReport(**cached.data)

    report = generate_weather()

    if storage is not None and ttl_seconds > 0:
        storage.update_weather_cache(location, report.model_dump())

    return report

def get_cultural_info(location: str) -> CulturalInfo:
    # Placeholder content, identical for every location
    return CulturalInfo(
        languages=['English', 'Local Language'],
        festivals=[
            'New Year Celebration',
            'Summer Festival',
            'Harvest Festival',
        ],
        customs='Rich in tradition and customs, visitors should respect local practices.',
        etiquette=[
            'Remove shoes before entering homes',
            'Bow when greeting elders',
            'Use right hand for eating',
        ],
    )

def get_transportation(location: str) -> TransportationInfo:
    return TransportationInfo(
        flights=[
            FlightOption(airline='Global Airways', departure='10:00 AM', arrival='2:00 PM', price=299, duration='4h'),
            FlightOption(airline='Sky Express', departure='2:00 PM', arrival='6:00 PM', price=349, duration='4h'),
        ],
        trains=[
            TrainOption(operator='Express Rail', departure='9:00 AM', arrival='4:00 PM', price=89, duration='7h'),
            TrainOption(operator='Local Train', departure='11:00 AM', arrival='6:00 PM', price=59, duration='7h'),
        ],
    )

def get_soundtrack(location: str) -> Soundtrack:
    return Soundtrack(
        genres=['Folk', 'Traditional', 'Contemporary'],
        cultural_context=f'Music in {location} blends traditional rhythms with modern influences.',
        recommendations=[
            SoundtrackTrack(title='Morning in the Old Town', artist='Local Folk Ensemble'),
            SoundtrackTrack(title='Harbour Lights', artist='City Strings'),
            SoundtrackTrack(title='Festival Night', artist='Street Drummers'),
        ],
    )
