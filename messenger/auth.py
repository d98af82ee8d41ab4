import os
from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from datetime import datetime, timedelta
from .errors import Unauthenticated, Forbidden

# Prefer JWT_SECRET but support legacy JWT_SECRET_KEY for compatibility
SECRET = os.getenv('JWT_SECRET') or os.getenv('JWT_SECRET_KEY', 'devsecret')
ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', str(60 * 24)))

ROLE_CLAIM = 'auth'
ADMIN_ROLE = 'ADMIN'

oauth2_scheme = OAuth2PasswordBearer(tokenUrl='/api/members/login', auto_error=False)

def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({'exp': expire})
    encoded = jwt.encode(to_encode, SECRET, algorithm=ALGORITHM)
    return encoded

def decode_token(token: str):
    try:
        payload = jwt.decode(token, SECRET, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None

def resolve_caller_id(token: Optional[str]) -> Optional[str]:
    """Member id carried by a bearer token, or None when it is missing or invalid."""
    if not token:
        return None
    payload = decode_token(token)
    if not payload:
        return None
    return payload.get('sub') or None

async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> dict:
    caller_id = resolve_caller_id(token)
    if caller_id is None:
        raise Unauthenticated()
    payload = decode_token(token)
    return {'id': caller_id, 'role': payload.get(ROLE_CLAIM)}

async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get('role') != ADMIN_ROLE:
        raise Forbidden()
    return current_user
