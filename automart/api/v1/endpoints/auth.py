"""
认证API接口模块

signup 与 signin 无需登录即可访问，其余接口均要求 Bearer 令牌
"""
from fastapi import APIRouter, Depends

from automart.api.dependencies import get_auth_service, get_current_user
from automart.infrastructure.response import success_response
from automart.schemas.user import AuthUser, SigninRequest, SignupRequest
from automart.services import AuthService

router = APIRouter()


# 注册接口
@router.post("/signup")
def signup(
        request: SignupRequest,
        service: AuthService = Depends(get_auth_service),
):
    return success_response(data=service.signup(request), msg="注册成功")


# 登录接口
@router.post("/signin")
def signin(
        request: SigninRequest,
        service: AuthService = Depends(get_auth_service),
):
    """
    登录并获取访问令牌

    Returns:
        dict: data 中包含 access_token、token_type、expires_in
    """
    return success_response(data=service.signin(request), msg="登录成功")


# 当前用户接口
@router.get("/me")
def me(user: AuthUser = Depends(get_current_user)):
    return success_response(data=user.model_dump(), msg="获取当前用户成功")
