from fastapi import APIRouter, Depends
from datetime import datetime
from typing import List
from pymongo.collection import Collection

from mindwatch.core.config import Settings, get_settings
from mindwatch.db.database import get_chat_collection
from mindwatch.models.chat import ChatMessage, ChatRequest, ConversationTurn
from mindwatch.routers.auth_dependency import get_current_user_id
from mindwatch.services.ai_service import therapy_reply
from mindwatch.services.model_gateway import ModelGateway, get_gateway

router = APIRouter(
    prefix="/chat",
    tags=["Chat"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("/send", response_model=ChatMessage)
async def send_message(
    request: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    chat_collection: Collection = Depends(get_chat_collection),
    gateway: ModelGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    cursor = (
        chat_collection.find({"user_id": user_id})
        .sort("timestamp", -1)
        .limit(settings.chat_history_limit)
    )
    history_docs = list(cursor)[::-1]
    history = [
        ConversationTurn(role=doc["role"], content=doc["content"])
        for doc in history_docs
        if doc.get("content")
    ]

    # ServiceUnavailable propagates to the app-level handler (503); nothing is stored.
    reply_text = await therapy_reply(history, request.message, gateway=gateway)

    user_msg = ChatMessage(
        user_id=user_id,
        role="user",
        content=request.message,
        timestamp=datetime.now()
    )
    bot_msg = ChatMessage(
        user_id=user_id,
        role="assistant",
        content=reply_text,
        timestamp=datetime.now()
    )
    # Both turns go out in one ordered write
    result = chat_collection.insert_many(
        [
            user_msg.model_dump(by_alias=True, exclude={"id"}),
            bot_msg.model_dump(by_alias=True, exclude={"id"}),
        ],
        ordered=True,
    )

    bot_msg.id = result.inserted_ids[1]
    return bot_msg


@router.get("/history", response_model=List[ChatMessage])
async def get_chat_history(
    user_id: str = Depends(get_current_user_id),
    chat_collection: Collection = Depends(get_chat_collection),
):
    return list(chat_collection.find({"user_id": user_id}).sort("timestamp", 1))


@router.delete("/history")
async def clear_chat_history(
    user_id: str = Depends(get_current_user_id),
    chat_collection: Collection = Depends(get_chat_collection),
):
    result = chat_collection.delete_many({"user_id": user_id})
    return {
        "message": "Chat history cleared",
        "deleted_count": result.deleted_count
    }
