from fastapi import APIRouter, Depends
from typing import List
from ..schemas.chats import SendPersonalChatIn, ChatOut, ChatPageOut, EnterChatGroupOut, ActionOkOut
from ..chat_service import (
    send_personal_chat,
    delete_personal_chat,
    list_all_personal_chat,
    list_personal_chat_by_sender,
    list_personal_chat_by_receiver,
    list_personal_chat_by_group,
    enter_personal_chat_group,
)
from ..pagination import PaginationParams, DEFAULT_PAGE_SIZE, next_cursor
from ..auth import get_current_user, require_admin

router = APIRouter()


def _page(chats: List) -> dict:
    return {'items': chats, 'next_id': next_cursor(chats)}


@router.post('/', response_model=ChatOut)
async def send(payload: SendPersonalChatIn, current_user: dict = Depends(get_current_user)):
    return await send_personal_chat(current_user['id'], payload.receiver_id, payload.content)


@router.delete('/{chat_id}', response_model=ActionOkOut)
async def delete(chat_id: int, current_user: dict = Depends(get_current_user)):
    await delete_personal_chat(chat_id, current_user['id'])
    return {'ok': True, 'message': 'success'}


# developer/admin view, includes soft-deleted chats
@router.get('/', response_model=ChatPageOut)
async def list_all(params: PaginationParams = Depends(), current_user: dict = Depends(require_admin)):
    chats = await list_all_personal_chat(params.last_seen_id, params.page_size)
    return _page(chats)


@router.get('/sent', response_model=ChatPageOut)
async def list_sent(params: PaginationParams = Depends(), current_user: dict = Depends(get_current_user)):
    chats = await list_personal_chat_by_sender(current_user['id'], params.last_seen_id, params.page_size)
    return _page(chats)


@router.get('/received', response_model=ChatPageOut)
async def list_received(params: PaginationParams = Depends(), current_user: dict = Depends(get_current_user)):
    chats = await list_personal_chat_by_receiver(current_user['id'], params.last_seen_id, params.page_size)
    return _page(chats)


@router.get('/personal/{opposite_id}/enter', response_model=EnterChatGroupOut)
async def enter_group(opposite_id: str, page_size: int = DEFAULT_PAGE_SIZE, current_user: dict = Depends(get_current_user)):
    entered = await enter_personal_chat_group(current_user['id'], opposite_id, page_size)
    page = _page(entered.chats)
    page['latest_received_chat'] = entered.latest_received
    return page


@router.get('/personal/{opposite_id}', response_model=ChatPageOut)
async def list_group(opposite_id: str, params: PaginationParams = Depends(), current_user: dict = Depends(get_current_user)):
    chats = await list_personal_chat_by_group(current_user['id'], opposite_id, params.last_seen_id, params.page_size)
    return _page(chats)
