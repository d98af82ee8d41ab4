from .models import AsyncSessionLocal
from .models.members import Member
from .models.chats import PersonalChat
from passlib.context import CryptContext
from .auth import create_access_token, ROLE_CLAIM
from .conversation import canonicalize
from .errors import DuplicateKey, InvalidArgument
from .pagination import ChatFilter, PageRequest, paginate
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto')

# members
async def create_member(payload):
    async with AsyncSessionLocal() as session:
        member = Member(
            id=payload.id,
            hashed_password=pwd_ctx.hash(payload.password),
            display_name=payload.display_name,
            status_message=payload.status_message,
        )
        session.add(member)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise DuplicateKey('Member id already exists')
        await session.refresh(member)
        return member

async def authenticate_member(member_id: str, password: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Member).where(Member.id == member_id))
        member = q.scalars().first()
        if not member or not pwd_ctx.verify(password, member.hashed_password):
            return None
        access = create_access_token({'sub': member.id, ROLE_CLAIM: member.role})
        return {'access_token': access, 'token_type': 'bearer'}

async def get_member_by_id(member_id: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Member).where(Member.id == member_id))
        return q.scalars().first()

async def list_members():
    async with AsyncSessionLocal() as session:
        res = await session.execute(select(Member).order_by(Member.id))
        return res.scalars().all()

# personal chats
async def insert_chat(sender_id: str, receiver_id: str, content: str):
    async with AsyncSessionLocal() as session:
        chat = PersonalChat(
            sender_id=sender_id,
            receiver_id=receiver_id,
            group_key=canonicalize(sender_id, receiver_id),
            content=content,
            is_read=False,
            is_deleted=False,
        )
        session.add(chat)
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning({'msg': 'chat_insert_conflict', 'sender_id': sender_id, 'receiver_id': receiver_id, 'error': str(e.orig)})
            raise DuplicateKey('Chat could not be stored due to a uniqueness conflict')
        await session.refresh(chat)
        return chat

def _filter_clause(filter_kind: ChatFilter, member_id: str | None, group_key: str | None):
    if filter_kind is ChatFilter.ALL:
        return None
    if filter_kind is ChatFilter.BY_SENDER:
        if not member_id:
            raise InvalidArgument('member_id is required for a by-sender listing')
        return (PersonalChat.sender_id == member_id) & PersonalChat.is_deleted.is_(False)
    if filter_kind is ChatFilter.BY_RECEIVER:
        if not member_id:
            raise InvalidArgument('member_id is required for a by-receiver listing')
        return (PersonalChat.receiver_id == member_id) & PersonalChat.is_deleted.is_(False)
    if filter_kind is ChatFilter.BY_GROUP:
        if not group_key:
            raise InvalidArgument('group_key is required for a by-group listing')
        return (PersonalChat.group_key == group_key) & PersonalChat.is_deleted.is_(False)
    raise InvalidArgument(f'Unknown chat filter: {filter_kind}')

async def query_chats(filter_kind: ChatFilter, page: PageRequest, member_id: str | None = None, group_key: str | None = None):
    """One page of chats matching ``filter_kind``, newest first.

    Soft-deleted chats are only returned by the ALL filter.
    """
    stmt = select(PersonalChat)
    clause = _filter_clause(filter_kind, member_id, group_key)
    if clause is not None:
        stmt = stmt.where(clause)
    async with AsyncSessionLocal() as session:
        res = await session.execute(paginate(stmt, page))
        return res.scalars().all()

async def find_chat_by_id(chat_id: int):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(PersonalChat).where(PersonalChat.id == chat_id))
        return q.scalars().first()

async def find_latest_received_in_group(receiver_id: str, group_key: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(
            select(PersonalChat)
            .where(
                PersonalChat.group_key == group_key,
                PersonalChat.receiver_id == receiver_id,
                PersonalChat.is_deleted.is_(False),
            )
            .order_by(PersonalChat.id.desc())
            .limit(1)
        )
        return q.scalars().first()

async def update_read_flag(chat_id: int) -> int:
    # guarded so concurrent or repeated marks only flip the row once
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            update(PersonalChat)
            .where(PersonalChat.id == chat_id, PersonalChat.is_read.is_(False))
            .values(is_read=True)
        )
        await session.commit()
        return res.rowcount

async def update_deleted_flag(chat_id: int) -> int:
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            update(PersonalChat)
            .where(PersonalChat.id == chat_id, PersonalChat.is_deleted.is_(False))
            .values(is_deleted=True)
        )
        await session.commit()
        return res.rowcount
