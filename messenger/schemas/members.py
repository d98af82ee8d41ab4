from pydantic import BaseModel, Field
from typing import Optional

class RegisterIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=255, pattern=r'\S')
    password: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    status_message: Optional[str] = None

class TokenOut(BaseModel):
    access_token: str
    token_type: str = 'bearer'

class MemberOut(BaseModel):
    id: str
    display_name: Optional[str] = None
    status_message: Optional[str] = None

    class Config:
        from_attributes = True
