from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # LLM providers
    AI_PROVIDER: str = "mock"  # openai | mistral | gemini | mock
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    MISTRAL_API_KEY: Optional[str] = None
    MISTRAL_MODEL: str = "mistral-tiny"
    MISTRAL_API_URL: str = "https://api.mistral.ai/v1/chat/completions"
    GOOGLE_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    AI_REQUEST_TIMEOUT: float = 60.0

    # Image generation
    IMAGE_PROVIDER: str = "openai"  # openai | huggingface
    HUGGINGFACE_API_KEY: Optional[str] = None
    HUGGINGFACE_IMAGE_MODEL: str = "stabilityai/stable-diffusion-2-1"

    # Geocoding
    OPENROUTE_API_KEY: Optional[str] = None
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    OPENROUTE_GEOCODE_URL: str = "https://api.openrouteservice.org/geocode/search"
    HTTP_TIMEOUT: float = 10.0

    # Sessions and registration
    SESSION_SECRET_KEY: str = "change-me"
    ALLOWED_REGISTRATION_EMAILS: str = ""  # comma separated, empty = open

    WEATHER_CACHE_TTL_SECONDS: int = 0
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"

    @property
    def allowed_emails(self) -> List[str]:
        return [
            email.strip().lower()
            for email in self.ALLOWED_REGISTRATION_EMAILS.split(",")
            if email.strip()
        ]

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
