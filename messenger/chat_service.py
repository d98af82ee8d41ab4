"""
Personal chat service layer.

Business rules for one-to-one conversations: sending, soft-deleting, the
cursor-paginated listings and read-marking on conversation entry. Every
function takes the caller's member id explicitly; authentication happens
before these are called.

Expected failures raise the typed errors from ``messenger.errors``. Storage
I/O errors are not caught here.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from . import crud
from .conversation import canonicalize
from .core import CHATS_SENT, CHATS_DELETED, CHATS_MARKED_READ
from .errors import InvalidArgument, NotFound
from .models.chats import PersonalChat
from .pagination import ChatFilter, PageRequest

logger = logging.getLogger(__name__)


@dataclass
class EnteredGroup:
    """Result of entering a conversation: the first page plus the chat just marked read"""
    chats: List[PersonalChat] = field(default_factory=list)
    latest_received: Optional[PersonalChat] = None


def _require_id(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f'{name} must not be empty')
    return value


async def send_personal_chat(sender_id: str, receiver_id: str, content: str) -> PersonalChat:
    _require_id(sender_id, 'sender_id')
    _require_id(receiver_id, 'receiver_id')
    if content is None or not content.strip():
        raise InvalidArgument('content must not be empty')

    # both ends must be registered members
    for member_id in (sender_id, receiver_id):
        if await crud.get_member_by_id(member_id) is None:
            raise NotFound(f'Member {member_id} not found')

    chat = await crud.insert_chat(sender_id, receiver_id, content)
    CHATS_SENT.inc()
    logger.info({'msg': 'chat_sent', 'chat_id': chat.id, 'sender_id': sender_id, 'receiver_id': receiver_id})
    return chat


async def delete_personal_chat(chat_id: int, caller_id: str) -> PersonalChat:
    """Soft-delete a chat sent by the caller.

    A chat that does not exist and a chat sent by someone else produce the same
    NotFound, so callers cannot probe other members' messages. Deleting an
    already-deleted chat succeeds without changing anything.
    """
    _require_id(caller_id, 'caller_id')
    chat = await crud.find_chat_by_id(chat_id)
    if chat is None or chat.sender_id != caller_id:
        logger.debug({'msg': 'chat_delete_masked', 'chat_id': chat_id, 'caller_id': caller_id})
        raise NotFound(f'Chat {chat_id} not found')
    if chat.is_deleted:
        return chat

    if await crud.update_deleted_flag(chat_id):
        CHATS_DELETED.inc()
        logger.info({'msg': 'chat_deleted', 'chat_id': chat_id, 'caller_id': caller_id})
    chat.is_deleted = True
    return chat


async def list_all_personal_chat(last_seen_id: Optional[int] = None, page_size: Optional[int] = None) -> List[PersonalChat]:
    """Administrative listing, soft-deleted chats included"""
    return await crud.query_chats(ChatFilter.ALL, PageRequest.of(last_seen_id, page_size))


async def list_personal_chat_by_sender(caller_id: str, last_seen_id: Optional[int] = None, page_size: Optional[int] = None) -> List[PersonalChat]:
    _require_id(caller_id, 'caller_id')
    return await crud.query_chats(ChatFilter.BY_SENDER, PageRequest.of(last_seen_id, page_size), member_id=caller_id)


async def list_personal_chat_by_receiver(caller_id: str, last_seen_id: Optional[int] = None, page_size: Optional[int] = None) -> List[PersonalChat]:
    _require_id(caller_id, 'caller_id')
    return await crud.query_chats(ChatFilter.BY_RECEIVER, PageRequest.of(last_seen_id, page_size), member_id=caller_id)


async def list_personal_chat_by_group(caller_id: str, opposite_id: str, last_seen_id: Optional[int] = None, page_size: Optional[int] = None) -> List[PersonalChat]:
    group_key = canonicalize(caller_id, opposite_id)
    return await crud.query_chats(ChatFilter.BY_GROUP, PageRequest.of(last_seen_id, page_size), group_key=group_key)


async def mark_personal_chat_as_read_by_group(caller_id: str, opposite_id: str) -> Optional[PersonalChat]:
    """Mark the newest chat the caller received in this conversation as read.

    Only that one chat is touched, older unread chats stay unread. Returns the
    selected chat (it may already have been read) or None when the caller has
    received nothing in the conversation.
    """
    group_key = canonicalize(caller_id, opposite_id)
    chat = await crud.find_latest_received_in_group(caller_id, group_key)
    if chat is None:
        return None
    if not chat.is_read:
        if await crud.update_read_flag(chat.id):
            CHATS_MARKED_READ.inc()
            logger.info({'msg': 'chat_marked_read', 'chat_id': chat.id, 'caller_id': caller_id})
        chat.is_read = True
    return chat


async def enter_personal_chat_group(caller_id: str, opposite_id: str, page_size: Optional[int] = None) -> EnteredGroup:
    chats = await list_personal_chat_by_group(caller_id, opposite_id, None, page_size)
    latest = await mark_personal_chat_as_read_by_group(caller_id, opposite_id)
    if latest is not None:
        # the page was read before marking; show the post-marking state in both views
        for chat in chats:
            if chat.id == latest.id:
                chat.is_read = latest.is_read
    return EnteredGroup(chats=list(chats), latest_received=latest)
