from datetime import datetime
from pydantic import BaseModel
from typing import Optional, List

class SendPersonalChatIn(BaseModel):
    receiver_id: str
    content: str

class ChatOut(BaseModel):
    id: int
    sender_id: str
    receiver_id: str
    content: str
    created_at: Optional[datetime] = None
    is_read: bool
    is_deleted: bool

    class Config:
        from_attributes = True

class ChatPageOut(BaseModel):
    items: List[ChatOut]
    # pass back as last_seen_id to fetch the next (older) page
    next_id: Optional[int] = None

class EnterChatGroupOut(ChatPageOut):
    latest_received_chat: Optional[ChatOut] = None

class ActionOkOut(BaseModel):
    ok: bool = True
    message: Optional[str] = None
