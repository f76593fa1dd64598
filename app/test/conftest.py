import pytest
from fastapi.testclient import TestClient
from app.config.settings import Settings
from app.models.chat import ChatMessage, now_millis
from app.models.travel import GeocodeResult
from app.services.ai_service import AIReply
from main import create_app


class FakeAIClient:
    """Records prompts and answers with a fixed reply."""

    def __init__(self, content="Paris is lovely. Flights from $400.", location=None, error=None):
        self.content = content
        self.location = location
        self.error = error
        self.prompts = []

    def chat(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return AIReply(
            message=ChatMessage(role="assistant", content=self.content, timestamp=now_millis()),
            location=self.location,
        )


class FakeImageGenerator:

    def __init__(self, error=None):
        self.error = error
        self.locations = []

    def generate(self, location):
        self.locations.append(location)
        if self.error:
            raise self.error
        return f"https://images.example.org/{location}.png"


class FakeGeocoder:

    KNOWN = {"Paris": (48.8566, 2.3522)}

    def geocode(self, place_name):
        if place_name not in self.KNOWN:
            return None
        lat, lon = self.KNOWN[place_name]
        return GeocodeResult(location=place_name, lat=lat, lon=lon, display_name=f"{place_name}, France")


def make_settings(**overrides):
    values = {
        "AI_PROVIDER": "mock",
        "SESSION_SECRET_KEY": "test-secret",
        "ALLOWED_REGISTRATION_EMAILS": "",
        "WEATHER_CACHE_TTL_SECONDS": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
def image_generator():
    return FakeImageGenerator()


@pytest.fixture
def app(ai_client, image_generator):
    return create_app(make_settings(), ai_client=ai_client, image_generator=image_generator,
                      geocoding_service=FakeGeocoder())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def storage(client):
    return client.app.state.storage


@pytest.fixture
def register(client):
    def _register(email="traveler@travelmail.com", password="secret123"):
        response = client.post("/api/register", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()
    return _register


@pytest.fixture
def fake_ai_client():
    """Factory for AI clients with a custom reply, location or error."""
    return FakeAIClient


@pytest.fixture
def fake_image_generator():
    return FakeImageGenerator


@pytest.fixture
def make_client():
    """Build a started TestClient with custom collaborators or settings."""
    clients = []

    def _make(ai_client=None, image_generator=None, **setting_overrides):
        app = create_app(
            make_settings(**setting_overrides),
            ai_client=ai_client or FakeAIClient(),
            image_generator=image_generator or FakeImageGenerator(),
            geocoding_service=FakeGeocoder(),
        )
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)
