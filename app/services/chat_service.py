import logging
from fastapi import Request
from app.database.storage import MemStorage
from app.models.chat import ChatMessage, ChatRequest, ChatResponse, now_millis
from app.services.intent_router import IntentRouter
from app.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

class ChatService:
    """Route a chat turn, ask the AI client when needed, record the search."""

    def __init__(self, ai_client, storage: MemStorage):
        self.ai_client = ai_client
        self.storage = storage

    def handle_message(self, user_id: int, request: ChatRequest) -> ChatResponse:
        routed = IntentRouter.route(request.message)

        if not routed.needs_ai:
            logger.info(f"Canned '{routed.intent.value}' reply for user {user_id}")
            return ChatResponse(
                message=ChatMessage(role="assistant", content=routed.reply, timestamp=now_millis()),
                location=None,
            )

        # AIServiceError propagates to the route; no retry
        reply = self.ai_client.chat(routed.prompt)
        location = reply.location or routed.location

        translations = TranslationService.build_translations(reply.message.content, request.language)

        self.storage.record_search(
            user_id=user_id,
            query=request.message,
            location=location,
            category=routed.category,
        )

        return ChatResponse(
            message=reply.message,
            location=location,
            category=routed.category,
            translations=translations,
        )

def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service
