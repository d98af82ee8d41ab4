"""
Cursor pagination shared by every personal-chat listing.

Pages are newest first. A caller passes the id of the last record it has seen
and gets the next ``page_size`` records with a strictly smaller id. No cursor
means "start from the most recent record"; an empty page means there is
nothing older left.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from fastapi import Query

from .models.chats import PersonalChat

DEFAULT_PAGE_SIZE = int(os.getenv('CHAT_DEFAULT_PAGE_SIZE', '3'))
# 0 disables the upper clamp
MAX_PAGE_SIZE = int(os.getenv('CHAT_MAX_PAGE_SIZE', '0'))


class ChatFilter(Enum):
    """Filter predicates understood by the persistence gateway"""
    ALL = 'all'
    BY_SENDER = 'by_sender'
    BY_RECEIVER = 'by_receiver'
    BY_GROUP = 'by_group'


@dataclass(frozen=True)
class PageRequest:
    last_seen_id: Optional[int] = None
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def of(cls, last_seen_id: Optional[int] = None, page_size: Optional[int] = None) -> 'PageRequest':
        if page_size is None:
            page_size = DEFAULT_PAGE_SIZE
        page_size = max(1, page_size)
        if MAX_PAGE_SIZE > 0:
            page_size = min(page_size, MAX_PAGE_SIZE)
        return cls(last_seen_id=last_seen_id, page_size=page_size)


def paginate(stmt, page: PageRequest):
    """Apply the cursor, newest-first ordering and page limit to a SELECT."""
    if page.last_seen_id is not None:
        stmt = stmt.where(PersonalChat.id < page.last_seen_id)
    return stmt.order_by(PersonalChat.id.desc()).limit(page.page_size)


def next_cursor(items: Sequence[PersonalChat]) -> Optional[int]:
    if not items:
        return None
    return items[-1].id


class PaginationParams:
    """Query parameters accepted by listing routes."""

    def __init__(
        self,
        last_seen_id: Optional[int] = Query(None, description='id of the last chat already seen'),
        page_size: Optional[int] = Query(DEFAULT_PAGE_SIZE, description='number of chats to return'),
    ):
        self.last_seen_id = last_seen_id
        self.page_size = page_size
