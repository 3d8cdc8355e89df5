from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class TokenData(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int


class AuthUserOut(BaseModel):
    id: int
    username: str
    role_id: Optional[int]
    role_name: Optional[str]
    is_system_admin: bool
    client_ids: List[int]
    permissions: List[str]
    last_login: Optional[datetime]


class LoginData(BaseModel):
    auth: TokenData
    user: AuthUserOut
