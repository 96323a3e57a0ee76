from fastapi import APIRouter, Depends

from automart.api.dependencies import get_current_user
from automart.api.v1.endpoints import auth, categories, products


api_router = APIRouter()

# 包含各模块的路由，除认证接口外均需要登录
api_router.include_router(auth.router, prefix="/auth", tags=["认证"])
api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["商品分类"],
    dependencies=[Depends(get_current_user)],
)
api_router.include_router(
    products.router,
    prefix="/products",
    tags=["商品"],
    dependencies=[Depends(get_current_user)],
)
