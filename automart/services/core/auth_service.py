import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from automart.core.config import settings
from automart.core.security import create_access_token, hash_password, verify_password
from automart.infrastructure.exceptions import DuplicateUserError, InvalidCredentialsError
from automart.models.user import User, ROLE_USER
from automart.repositories.user_repository import UserRepository
from automart.schemas.user import SigninRequest, SignupRequest, TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    """
    用户注册与登录

    登录成功后签发 JWT 访问令牌，后续请求通过 Bearer 头携带
    """

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def signup(self, request: SignupRequest) -> Dict[str, Any]:
        email = request.email.strip().lower()
        if self.user_repository.find_by_email(email) is not None:
            raise DuplicateUserError(email)

        user = User(
            email=email,
            name=request.name,
            password_hash=hash_password(request.password),
            role=ROLE_USER,
        )
        try:
            user = self.user_repository.save(user)
        except IntegrityError as e:
            raise DuplicateUserError(email) from e

        logger.info(f"用户注册成功: {user.email}")
        return user.to_dict()

    def signin(self, request: SigninRequest) -> Dict[str, Any]:
        email = request.email.strip().lower()
        user = self.user_repository.find_by_email(email)
        if user is None or not verify_password(request.password, user.password_hash):
            logger.warning(f"登录失败: {email}")
            raise InvalidCredentialsError()

        token = create_access_token(user.id, {"email": user.email, "role": user.role})
        return TokenResponse(
            access_token=token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        ).model_dump()
