"""
密码哈希与JWT令牌工具

密码使用 bcrypt 哈希保存；访问令牌为 HS256 签名的 JWT，
包含 sub(用户ID)、email、role 和 exp 声明
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

from automart.core.config import settings

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """令牌无效或已过期"""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.expired = expired


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # 数据库中的哈希值格式损坏
        logger.warning("密码哈希格式无效")
        return False


def create_access_token(
        subject: Any,
        claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
) -> str:
    """
    签发访问令牌

    Args:
        subject: 令牌主体，通常为用户ID
        claims: 额外声明，例如 email、role
        expires_delta: 有效期，默认 ACCESS_TOKEN_EXPIRE_MINUTES
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    payload = dict(claims or {})
    payload.update({
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    })
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    校验并解析访问令牌

    Raises:
        TokenError: 签名错误、格式错误、缺少 sub 或已过期
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenError("Token has expired", expired=True)
    except JWTError as e:
        raise TokenError(f"Invalid token: {str(e)}")

    if not payload.get("sub"):
        raise TokenError("Invalid token: missing user ID")
    return payload
