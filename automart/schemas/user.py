from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """注册请求模型"""
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)


class SigninRequest(BaseModel):
    """登录请求模型"""
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthUser(BaseModel):
    """
    从JWT中解析出的当前用户

    只包含令牌本身携带的信息，不查询数据库
    """
    id: int
    email: Optional[str] = None
    role: str

    class Config:
        frozen = True
