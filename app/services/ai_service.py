import json, re, logging
import requests
import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from openai import OpenAI
import openai
from dataclasses import dataclass
from typing import Optional
from app.config.settings import Settings
from app.models.chat import ChatMessage, now_millis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a friendly travel assistant. Keep your responses extremely brief and only focus on:
1. Very brief comment about the location (1 short sentence)
2. Quick overview of flight options (1-2 flight options with prices)

Example response: "Paris is the beautiful capital of France. Direct flights available from $400 (8h) or $550 (7h) with Air France."

Keep it conversational and simple. No extra details about culture, weather, or other topics.
Respond in JSON format with: { "message": { "role": "assistant", "content": "your response" }, "location": "mentioned location or null" }"""

class AIServiceError(Exception):
    """Generic provider failure: network, timeout, malformed reply."""

class AIConfigurationError(AIServiceError):
    """Missing or rejected API key."""

@dataclass
class AIReply:
    message: ChatMessage
    location: Optional[str] = None

def parse_structured_reply(raw: str) -> AIReply:
    """
    Parse a provider's JSON reply of the shape
    {"message": {"role": ..., "content": ...}, "location": ...}.
    The timestamp is always stamped here, whatever the model sent.
    """
    try:
        data = json.loads(raw)
        content = data["message"]["content"]
    except (TypeError, ValueError, KeyError) as e:
        logger.error(f"Malformed provider reply: {e}")
        raise AIServiceError("Failed to process message. Please try again.") from e

    if not isinstance(content, str) or not content.strip():
        raise AIServiceError("Failed to process message. Please try again.")

    location = data.get("location")
    if not isinstance(location, str) or not location.strip() or location.strip().lower() == "null":
        location = None

    return AIReply(
        message=ChatMessage(role="assistant", content=content.strip(), timestamp=now_millis()),
        location=location.strip() if location else None,
    )

class OpenAIClient:

    def __init__(self, api_key: Optional[str], model: str = "gpt-4o", timeout: float = 60.0):
        self.model = model
        self.client = OpenAI(api_key=api_key, timeout=timeout) if api_key else None
        if not api_key:
            logger.warning("OPENAI_API_KEY is not set, chat requests will fail")

    def chat(self, prompt: str) -> AIReply:
        if self.client is None:
            raise AIConfigurationError("OPENAI_API_KEY environment variable is not set")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"OpenAIClient: authentication failed: {e}")
            raise AIConfigurationError("OpenAI API key was rejected") from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAIClient: request failed: {e}")
            raise AIServiceError("Failed to process message. Please try again.") from e

        return parse_structured_reply(response.choices[0].message.content)

class MistralClient:

    def __init__(self, api_key: Optional[str], model: str = "mistral-tiny",
                 api_url: str = "https://api.mistral.ai/v1/chat/completions",
                 timeout: float = 60.0):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        if not api_key:
            logger.warning("MISTRAL_API_KEY is not set, chat requests will fail")

    def chat(self, prompt: str) -> AIReply:
        if not self.api_key:
            raise AIConfigurationError("MISTRAL_API_KEY environment variable is not set")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = requests.post(self.api_url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"MistralClient: request failed: {e}")
            raise AIServiceError("Failed to process message. Please try again.") from e

        if response.status_code in (401, 403):
            logger.error(f"MistralClient: authentication failed: {response.text}")
            raise AIConfigurationError("Mistral API key was rejected")

        if response.status_code != 200:
            logger.error(f"MistralClient: API error {response.status_code}: {response.text}")
            raise AIServiceError("Failed to process message. Please try again.")

        try:
            raw = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"MistralClient: unexpected response body: {e}")
            raise AIServiceError("Failed to process message. Please try again.") from e

        return parse_structured_reply(raw)

class GeminiClient:

    def __init__(self, api_key: Optional[str], model: str = "gemini-1.5-flash", timeout: float = 60.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        if api_key:
            genai.configure(api_key=api_key)
        else:
            logger.warning("GOOGLE_API_KEY is not set, chat requests will fail")

    def chat(self, prompt: str) -> AIReply:
        if not self.api_key:
            raise AIConfigurationError("GOOGLE_API_KEY environment variable is not set")

        try:
            model = genai.GenerativeModel(self.model, system_instruction=SYSTEM_PROMPT)
            response = model.generate_content(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=0.7,
                    response_mime_type="application/json",
                ),
                request_options={"timeout": self.timeout},
            )
            raw = response.text
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as e:
            logger.error(f"GeminiClient: authentication failed: {e}")
            raise AIConfigurationError("Google API key was rejected") from e
        except google_exceptions.InvalidArgument as e:
            # An invalid key comes back as 400 INVALID_ARGUMENT
            if "api key" in str(e).lower():
                logger.error(f"GeminiClient: authentication failed: {e}")
                raise AIConfigurationError("Google API key was rejected") from e
            logger.error(f"GeminiClient: generation error: {e}")
            raise AIServiceError("Failed to process message. Please try again.") from e
        except Exception as e:
            logger.error(f"GeminiClient: generation error: {e}")
            raise AIServiceError("Failed to process message. Please try again.") from e

        return parse_structured_reply(raw)

class MockAIClient:
    """Offline replies for demos and local development."""

    LOCATION_PATTERNS = [
        re.compile(r'(?:visit|travel to|go to|about)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)', re.IGNORECASE),
        re.compile(r'([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+(?:travel|visit|information)', re.IGNORECASE),
    ]

    # The user query sits between "query:" and the end of its sentence
    QUERY_PATTERN = re.compile(r'query:\s*(.+?)\.?\s*\n')

    def extract_location(self, prompt: str) -> Optional[str]:
        match = self.QUERY_PATTERN.search(prompt)
        text = match.group(1) if match else prompt
        for pattern in self.LOCATION_PATTERNS:
            match = pattern.search(text)
            if match and match.group(1):
                return match.group(1).strip()
        return None

    def chat(self, prompt: str) -> AIReply:
        location = self.extract_location(prompt)
        if not location:
            content = ("Hello! I'm your travel assistant. Where would you like to travel? "
                       "I can help you find information about different destinations.")
        else:
            content = (f"{location} is a wonderful destination! You can find direct flights starting from $400. "
                       "Would you like to know more about the weather, cultural aspects, or transportation options?")

        return AIReply(
            message=ChatMessage(role="assistant", content=content, timestamp=now_millis()),
            location=location,
        )

def create_ai_client(settings: Settings):
    """Build the chat client for the configured AI_PROVIDER."""
    provider = settings.AI_PROVIDER.strip().lower()

    if provider == "openai":
        client = OpenAIClient(settings.OPENAI_API_KEY, settings.OPENAI_MODEL, settings.AI_REQUEST_TIMEOUT)
    elif provider == "mistral":
        client = MistralClient(settings.MISTRAL_API_KEY, settings.MISTRAL_MODEL,
                               settings.MISTRAL_API_URL, settings.AI_REQUEST_TIMEOUT)
    elif provider == "gemini":
        client = GeminiClient(settings.GOOGLE_API_KEY, settings.GEMINI_MODEL, settings.AI_REQUEST_TIMEOUT)
    elif provider == "mock":
        client = MockAIClient()
    else:
        raise ValueError(f"Unknown AI_PROVIDER '{settings.AI_PROVIDER}'")

    logger.info(f"AI provider: {provider}")
    return client
