from fastapi import APIRouter, HTTPException, Form
from typing import List
from ..schemas.members import RegisterIn, TokenOut, MemberOut
from ..crud import create_member, authenticate_member, get_member_by_id, list_members

router = APIRouter()


@router.post('/register', response_model=MemberOut)
async def register(payload: RegisterIn):
    return await create_member(payload)


@router.post('/login', response_model=TokenOut)
async def login(username: str = Form(...), password: str = Form(...)):
    # OAuth2 password form: username carries the member id
    token = await authenticate_member(username, password)
    if not token:
        raise HTTPException(status_code=401, detail='Invalid credentials')
    return token


@router.get('/', response_model=List[MemberOut])
async def members():
    return await list_members()


@router.get('/{member_id}', response_model=MemberOut)
async def get_member(member_id: str):
    member = await get_member_by_id(member_id)
    if not member:
        raise HTTPException(404, 'Member not found')
    return member
