import re, logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

class Intent(str, Enum):
    GREETING = "greeting"
    THANKS = "thanks"
    NEARBY = "nearby"
    BUDGET = "budget"
    CULTURAL = "cultural"
    GENERAL = "general"

GREETING_REPLY = (
    "Hello! I'm your travel assistant. I can help you discover places to visit "
    "and find travel information. Where would you like to explore?"
)
THANKS_REPLY = (
    "You're welcome! Let me know if you need any other travel information or assistance."
)

@dataclass(frozen=True)
class RoutedMessage:
    intent: Intent
    prompt: Optional[str] = None   # None for canned intents
    reply: Optional[str] = None    # canned text, no AI call needed
    category: Optional[str] = None
    location: Optional[str] = None

    @property
    def needs_ai(self) -> bool:
        return self.prompt is not None

class LocationExtractor:
    """Best-effort location extraction. Misses are expected, not bugs."""

    # Whole message is a short place name: "Paris", "New York"
    PLACE_NAME_PATTERN = re.compile(r'^[A-Z][a-zA-Z]*(?:\s+[A-Z][a-zA-Z]*){0,3}$')

    TRIGGER_PATTERNS = [
        re.compile(r'(?:i want to visit|show me|tell me about)\s+([a-z][a-z\s]*)', re.IGNORECASE),
        re.compile(r'\b(?:in|at|about|show)\s+([a-z][a-z\s]*)', re.IGNORECASE),
    ]

    @classmethod
    def extract_location(cls, message: str) -> Optional[str]:
        text = message.strip()
        if not text:
            return None

        if cls.PLACE_NAME_PATTERN.match(text):
            return text

        for pattern in cls.TRIGGER_PATTERNS:
            match = pattern.search(text)
            if match:
                location = match.group(1).strip()
                if location:
                    logger.info(f"Extracted location: '{location}'")
                    return location

        return None

class IntentRouter:

    GREETINGS = ['hello', 'hi', 'hey', 'hola', 'greetings']
    THANK_YOU_PHRASES = ['thank you', 'thanks', 'thx', 'thank']
    PROXIMITY_KEYWORDS = ['nearby', 'close', 'around', 'near', 'local', 'proximity']
    BUDGET_KEYWORDS = ['budget', 'cost', 'cheap', 'expensive', 'afford', 'price']
    CULTURAL_KEYWORDS = ['language', 'culture', 'speak', 'tradition', 'custom']

    # Checked in insertion order
    CATEGORY_KEYWORDS = {
        'education': ['school', 'university', 'college', 'library', 'education', 'academy'],
        'healthcare': ['hospital', 'clinic', 'pharmacy', 'doctor', 'medical', 'healthcare', 'dentist'],
        'tourism': ['attraction', 'museum', 'landmark', 'sightseeing', 'tourist', 'monument'],
        'dining': ['restaurant', 'cafe', 'food', 'eatery', 'dining', 'bakery'],
        'shopping': ['shop', 'mall', 'market', 'store', 'boutique', 'shopping'],
    }

    CATEGORY_FOCUS = {
        'education': "schools, universities, libraries and other educational institutions",
        'healthcare': "hospitals, clinics, pharmacies and other healthcare facilities",
        'tourism': "tourist attractions, museums, landmarks and sightseeing spots",
        'dining': "restaurants, cafes and local food experiences",
        'shopping': "shopping areas, markets, malls and local stores",
    }

    @classmethod
    def is_greeting(cls, text: str) -> bool:
        return any(text.startswith(greeting) for greeting in cls.GREETINGS)

    @classmethod
    def is_thanks(cls, text: str) -> bool:
        return any(phrase in text for phrase in cls.THANK_YOU_PHRASES)

    @classmethod
    def nearby_category(cls, text: str) -> Optional[str]:
        """Category of a nearby-place query, or None if it is not one."""
        if not any(kw in text for kw in cls.PROXIMITY_KEYWORDS):
            return None

        for category, keywords in cls.CATEGORY_KEYWORDS.items():
            if any(kw in text for kw in keywords):
                return category
        return None

    @classmethod
    def is_budget_query(cls, text: str) -> bool:
        return any(kw in text for kw in cls.BUDGET_KEYWORDS)

    @classmethod
    def is_cultural_query(cls, text: str) -> bool:
        return any(kw in text for kw in cls.CULTURAL_KEYWORDS)

    @staticmethod
    def build_prompt(intent: Intent, message: str, category: Optional[str] = None) -> str:

        if intent == Intent.NEARBY:
            focus = IntentRouter.CATEGORY_FOCUS[category]
            return f"""You are a travel assistant. Please recommend {focus} for this query: {message}.
                Include names, what makes each place worth visiting, and practical tips for getting there.
                Keep the response focused and practical."""

        elif intent == Intent.BUDGET:
            return f"""You are a travel assistant. Please provide helpful budget travel advice for this query: {message}.
                Include specific suggestions about destinations, accommodation, and activities within their budget range.
                Keep the response focused on practical travel advice."""

        elif intent == Intent.CULTURAL:
            return f"""You are a travel assistant. Please provide accurate cultural and language information for this query: {message}.
                Include specific details about languages spoken, cultural practices, and important customs.
                Keep the response informative and respectful."""

        return f"""You are a travel assistant. Please provide helpful travel information for this query: {message}.
                Include specific details about destinations, attractions, and practical travel tips.
                Keep the response focused on travel advice."""

    @classmethod
    def route(cls, message: str) -> RoutedMessage:
        """Classify a message; first matching rule wins."""
        text = message.lower().strip()
        location = LocationExtractor.extract_location(message)

        if cls.is_greeting(text):
            return RoutedMessage(intent=Intent.GREETING, reply=GREETING_REPLY)

        if cls.is_thanks(text):
            return RoutedMessage(intent=Intent.THANKS, reply=THANKS_REPLY)

        category = cls.nearby_category(text)
        if category:
            intent = Intent.NEARBY
        elif cls.is_budget_query(text):
            intent = Intent.BUDGET
        elif cls.is_cultural_query(text):
            intent = Intent.CULTURAL
        else:
            intent = Intent.GENERAL

        logger.info(f"Routed message as '{intent.value}' (category={category}, location={location})")
        return RoutedMessage(
            intent=intent,
            prompt=cls.build_prompt(intent, message, category),
            category=category,
            location=location,
        )

def route_message(message: str) -> RoutedMessage:
    return IntentRouter.route(message)
