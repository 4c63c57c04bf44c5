from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional
from datetime import datetime
from mindwatch.models.journal import PyObjectId
from bson import ObjectId

Role = Literal["system", "user", "assistant"]


class ConversationTurn(BaseModel):
    role: Role
    content: str


class ChatMessage(BaseModel):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    user_id: str
    role: Role
    content: str
    timestamp: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_encoders={ObjectId: str}
    )


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
