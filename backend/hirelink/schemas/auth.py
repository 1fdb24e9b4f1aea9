from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterIn(BaseModel):
    name: str = Field(max_length=100)
    email: str = Field(min_length=1, max_length=255)
    department: str = Field(default="", max_length=100)
    password: str = Field(min_length=1, max_length=128)


class LoginIn(BaseModel):
    email: str
    password: str


class AccountOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    department: Optional[str] = None
    is_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    message: str
    user: AccountOut
    token: Optional[str] = None


class MessageOut(BaseModel):
    message: str
