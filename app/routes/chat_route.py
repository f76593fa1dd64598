from fastapi import APIRouter, HTTPException, status, Depends
from app.database.connection import get_storage
from app.database.storage import MemStorage
from app.models.chat import ChatRequest, ChatResponse, Conversation, ConversationCreate
from app.models.user import UserInDB
from app.routes.auth_route import get_current_user
from app.services.ai_service import AIConfigurationError, AIServiceError
from app.services.chat_service import ChatService, get_chat_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/chat", response_model=ChatResponse)
def chat_message(
    request: ChatRequest,
    user: UserInDB = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    try:
        return chat_service.handle_message(user.id, request)
    except AIConfigurationError as e:
        logger.error(f"AI provider misconfigured: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    except AIServiceError as e:
        logger.error(f"Chat turn failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/conversations", response_model=Conversation)
def create_conversation(
    request: ConversationCreate,
    user: UserInDB = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage),
):
    conversation = storage.create_conversation(user.id, request.messages, request.location)
    logger.info(f"Conversation {conversation.id} saved for user {user.id}")
    return conversation


@router.get("/conversations/{conversation_id}", response_model=Conversation)
def get_conversation(
    conversation_id: int,
    user: UserInDB = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage),
):
    conversation = storage.get_conversation(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    if conversation.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own conversations"
        )

    return conversation
