"""
商品分类API接口模块
"""
from fastapi import APIRouter, Depends

from automart.api.dependencies import get_category_service
from automart.infrastructure.response import success_response
from automart.schemas.category import CategoryCreate
from automart.services import CategoryService

router = APIRouter()


@router.get("")
def list_categories(service: CategoryService = Depends(get_category_service)):
    return success_response(data=service.list_categories(), msg="获取分类列表成功")


@router.post("")
def create_category(
        request: CategoryCreate,
        service: CategoryService = Depends(get_category_service),
):
    return success_response(data=service.create_category(request), msg="创建分类成功")


@router.get("/{code}")
def get_category(code: str, service: CategoryService = Depends(get_category_service)):
    return success_response(data=service.get_category(code), msg="获取分类详情成功")


@router.delete("/{code}")
def delete_category(code: str, service: CategoryService = Depends(get_category_service)):
    """删除分类，仍有商品引用时返回403"""
    service.delete_category(code)
    return success_response(data=None, msg="删除分类成功")
