import json
import time
import httpx
import openai
import pytest
import requests
from unittest.mock import MagicMock, patch
from google.api_core import exceptions as google_exceptions

from app.config.settings import Settings
from app.services.ai_service import (
    AIConfigurationError,
    AIServiceError,
    GeminiClient,
    MistralClient,
    MockAIClient,
    OpenAIClient,
    create_ai_client,
    parse_structured_reply,
)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def structured(content="Rome is timeless.", location="Rome", timestamp=1):
    return json.dumps({
        "message": {"role": "assistant", "content": content, "timestamp": timestamp},
        "location": location,
    })


def openai_completion(raw):
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = raw
    return completion


# ==================== Reply parsing ====================

def test_parse_structured_reply_overrides_timestamp():
    before = int(time.time() * 1000)
    reply = parse_structured_reply(structured(timestamp=1))

    assert reply.message.role == "assistant"
    assert reply.message.content == "Rome is timeless."
    assert reply.location == "Rome"
    assert reply.message.timestamp >= before


@pytest.mark.parametrize("location", [None, "", "null", 42])
def test_parse_structured_reply_without_location(location):
    assert parse_structured_reply(structured(location=location)).location is None


@pytest.mark.parametrize("raw", [
    "Rome is timeless.",
    "{}",
    json.dumps({"message": "Rome"}),
    json.dumps({"message": {"role": "assistant"}}),
    json.dumps({"message": {"content": "   "}}),
    "null",
])
def test_parse_structured_reply_rejects_malformed(raw):
    with pytest.raises(AIServiceError):
        parse_structured_reply(raw)


# ==================== OpenAI ====================

def test_openai_client_sends_json_mode_request():
    client = OpenAIClient(api_key="sk-test")
    client.client = MagicMock()
    client.client.chat.completions.create.return_value = openai_completion(structured())

    reply = client.chat("Tell me about Rome")

    assert reply.message.content == "Rome is timeless."
    assert reply.location == "Rome"
    kwargs = client.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0]["role"] == "system"
    assert kwargs["messages"][1] == {"role": "user", "content": "Tell me about Rome"}


def test_openai_client_without_key_is_configuration_error():
    with pytest.raises(AIConfigurationError):
        OpenAIClient(api_key=None).chat("hello")


def test_openai_authentication_failure_is_configuration_error():
    client = OpenAIClient(api_key="sk-bad")
    client.client = MagicMock()
    response = httpx.Response(401, request=httpx.Request("POST", OPENAI_URL))
    client.client.chat.completions.create.side_effect = openai.AuthenticationError(
        "Incorrect API key provided", response=response, body=None
    )

    with pytest.raises(AIConfigurationError):
        client.chat("Tell me about Rome")


def test_openai_timeout_is_generic_failure():
    client = OpenAIClient(api_key="sk-test")
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = openai.APITimeoutError(
        request=httpx.Request("POST", OPENAI_URL)
    )

    with pytest.raises(AIServiceError) as exc_info:
        client.chat("Tell me about Rome")

    assert not isinstance(exc_info.value, AIConfigurationError)
    assert client.client.chat.completions.create.call_count == 1


def test_openai_non_json_reply_is_generic_failure():
    client = OpenAIClient(api_key="sk-test")
    client.client = MagicMock()
    client.client.chat.completions.create.return_value = openai_completion("not json")

    with pytest.raises(AIServiceError):
        client.chat("Tell me about Rome")


# ==================== Mistral ====================

def mistral_response(status_code=200, raw=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = {"choices": [{"message": {"content": raw}}]}
    return response


@patch("app.services.ai_service.requests.post")
def test_mistral_client_posts_chat_completion(mock_post):
    mock_post.return_value = mistral_response(raw=structured(content="Lisbon shines.", location="Lisbon"))
    client = MistralClient(api_key="mistral-key", timeout=5)

    reply = client.chat("I want to visit Lisbon")

    assert reply.message.content == "Lisbon shines."
    assert reply.location == "Lisbon"
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.mistral.ai/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer mistral-key"
    assert kwargs["json"]["model"] == "mistral-tiny"
    assert kwargs["timeout"] == 5


@pytest.mark.parametrize("status_code", [401, 403])
@patch("app.services.ai_service.requests.post")
def test_mistral_rejected_key_is_configuration_error(mock_post, status_code):
    mock_post.return_value = mistral_response(status_code=status_code, text="Unauthorized")

    with pytest.raises(AIConfigurationError):
        MistralClient(api_key="bad").chat("hi")


@patch("app.services.ai_service.requests.post")
def test_mistral_server_error_is_generic_failure(mock_post):
    mock_post.return_value = mistral_response(status_code=500, text="boom")

    with pytest.raises(AIServiceError) as exc_info:
        MistralClient(api_key="key").chat("hi")

    assert not isinstance(exc_info.value, AIConfigurationError)


@patch("app.services.ai_service.requests.post", side_effect=requests.exceptions.Timeout("slow"))
def test_mistral_timeout_is_not_retried(mock_post):
    with pytest.raises(AIServiceError):
        MistralClient(api_key="key").chat("hi")

    assert mock_post.call_count == 1


def test_mistral_without_key_is_configuration_error():
    with pytest.raises(AIConfigurationError):
        MistralClient(api_key=None).chat("hi")


# ==================== Gemini ====================

@patch("app.services.ai_service.genai")
def test_gemini_client_parses_json_reply(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value.text = structured()

    reply = GeminiClient(api_key="google-key").chat("Tell me about Rome")

    assert reply.location == "Rome"
    mock_genai.configure.assert_called_once_with(api_key="google-key")


@patch("app.services.ai_service.genai")
def test_gemini_unauthenticated_is_configuration_error(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = \
        google_exceptions.Unauthenticated("bad key")

    with pytest.raises(AIConfigurationError):
        GeminiClient(api_key="bad").chat("hi")


@patch("app.services.ai_service.genai")
def test_gemini_invalid_api_key_argument_is_configuration_error(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = \
        google_exceptions.InvalidArgument("API key not valid. Please pass a valid API key.")

    with pytest.raises(AIConfigurationError):
        GeminiClient(api_key="bad").chat("hi")


# ==================== Mock provider & factory ====================

def test_mock_client_reads_location_from_query():
    prompt = ("You are a travel assistant. Please provide helpful travel information for this query: "
              "I want to visit Paris.\n                Include specific details about destinations.")

    reply = MockAIClient().chat(prompt)

    assert reply.location == "Paris"
    assert reply.message.content.startswith("Paris is a wonderful destination!")


def test_mock_client_without_location():
    prompt = ("You are a travel assistant. Please provide helpful budget travel advice for this query: "
              "what can I afford.\n                Include specific suggestions about destinations.")

    reply = MockAIClient().chat(prompt)

    assert reply.location is None
    assert "Where would you like to travel?" in reply.message.content


@pytest.mark.parametrize("provider, expected", [
    ("openai", OpenAIClient),
    ("mistral", MistralClient),
    ("gemini", GeminiClient),
    ("MOCK", MockAIClient),
])
def test_create_ai_client_selects_provider(provider, expected):
    settings = Settings(_env_file=None, AI_PROVIDER=provider)
    assert isinstance(create_ai_client(settings), expected)


def test_create_ai_client_rejects_unknown_provider():
    with pytest.raises(ValueError):
        create_ai_client(Settings(_env_file=None, AI_PROVIDER="llama"))
