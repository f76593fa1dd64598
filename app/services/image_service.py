import base64, logging
from fastapi import Request
import requests
import openai
from openai import OpenAI
from typing import Optional
from app.config.settings import Settings
from app.services.ai_service import AIConfigurationError, AIServiceError

logger = logging.getLogger(__name__)

HUGGINGFACE_INFERENCE_URL = "https://api-inference.huggingface.co/models/{model}"

def image_prompt(location: str) -> str:
    return (f"A beautiful, high-quality travel photograph of {location}. "
            "Show iconic landmarks and scenery. Photorealistic style.")

class OpenAIImageGenerator:

    def __init__(self, api_key: Optional[str], timeout: float = 60.0):
        self.client = OpenAI(api_key=api_key, timeout=timeout) if api_key else None

    def generate(self, location: str) -> str:
        if self.client is None:
            raise AIConfigurationError("OPENAI_API_KEY environment variable is not set")

        try:
            response = self.client.images.generate(
                model="dall-e-3",
                prompt=image_prompt(location),
                n=1,
                size="1024x1024",
                quality="standard",
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"OpenAIImageGenerator: authentication failed: {e}")
            raise AIConfigurationError("OpenAI API key was rejected") from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAIImageGenerator: generation failed: {e}")
            raise AIServiceError(f"Failed to generate image: {e}") from e

        return response.data[0].url

class HuggingFaceImageGenerator:
    """Returns the generated image inline as a base64 data URL."""

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 60.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    def generate(self, location: str) -> str:
        if not self.api_key:
            raise AIConfigurationError("HUGGINGFACE_API_KEY environment variable is not set")

        try:
            response = requests.post(
                HUGGINGFACE_INFERENCE_URL.format(model=self.model),
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"inputs": image_prompt(location)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"HuggingFaceImageGenerator: request failed: {e}")
            raise AIServiceError(f"Failed to generate image: {e}") from e

        if response.status_code in (401, 403):
            raise AIConfigurationError("Hugging Face API key was rejected")
        if response.status_code != 200:
            logger.error(f"HuggingFaceImageGenerator: API error {response.status_code}: {response.text}")
            raise AIServiceError("Failed to generate image")

        content_type = response.headers.get("content-type", "image/jpeg")
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

def create_image_generator(settings: Settings):
    provider = settings.IMAGE_PROVIDER.strip().lower()
    if provider == "openai":
        return OpenAIImageGenerator(settings.OPENAI_API_KEY, settings.AI_REQUEST_TIMEOUT)
    if provider == "huggingface":
        return HuggingFaceImageGenerator(settings.HUGGINGFACE_API_KEY, settings.HUGGINGFACE_IMAGE_MODEL,
                                         settings.AI_REQUEST_TIMEOUT)
    raise ValueError(f"Unknown IMAGE_PROVIDER '{settings.IMAGE_PROVIDER}'")

def get_image_generator(request: Request):
    return request.app.state.image_generator
