"""
商品管理API接口模块

提供商品的登记、查询、修改和删除接口。登记与修改使用 multipart 表单，
图片通过 img 字段上传；业务异常由全局异常处理器转换为统一响应格式。
"""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from automart.api.dependencies import get_product_service
from automart.infrastructure.response import success_response, page_response
from automart.schemas.product import ImagePayload, ProductSaveRequest, ProductUpdateRequest
from automart.services import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


# 获取商品列表接口
@router.get("")
def list_products(
        page: int = Query(1, ge=1),  # 页码，默认第1页
        limit: int = Query(10, ge=1, le=100),  # 每页条数，默认10条
        category_code: Optional[str] = None,  # 按分类编码过滤
        name: Optional[str] = None,  # 按商品名称模糊匹配
        service: ProductService = Depends(get_product_service),
):
    """
    分页获取商品列表

    Returns:
        dict: {"code": 200, "msg": "...", "data": {"total", "page", "limit", "items"}}
    """
    result = service.list_products(page, limit, category_code, name)
    return page_response(result["items"], result["total"], page, limit, msg="获取商品列表成功")


# 商品登记接口
@router.post("")
async def save_product(
        request: ProductSaveRequest = Depends(ProductSaveRequest.as_form),
        img: UploadFile = File(...),
        service: ProductService = Depends(get_product_service),
):
    """
    登记商品并上传商品图片

    图片保存路径为 products/{categoryCode}/{productNo}，保存成功后写回 img_url
    上传文件在事件循环中读取，数据库与MinIO操作放到线程池执行
    """
    image = await ImagePayload.from_upload(img)
    product = await asyncio.to_thread(service.save_product, request, image)
    return success_response(data=product, msg="商品登记成功")


# 获取商品详情接口
@router.get("/{product_no}")
def get_product(
        product_no: int,
        service: ProductService = Depends(get_product_service),
):
    return success_response(data=service.get_product(product_no), msg="获取商品详情成功")


# 获取商品图片临时地址接口
@router.get("/{product_no}/image-url")
def get_product_image_url(
        product_no: int,
        expires: Optional[int] = Query(None, ge=60, le=7 * 24 * 3600),  # 有效期（秒）
        service: ProductService = Depends(get_product_service),
):
    url = service.get_product_image_url(product_no, expires)
    return success_response(data={"no": product_no, "url": url}, msg="获取商品图片地址成功")


# 商品修改接口
@router.put("/{product_no}")
async def update_product(
        product_no: int,
        request: ProductUpdateRequest = Depends(ProductUpdateRequest.as_form),
        img: Optional[UploadFile] = File(None),
        service: ProductService = Depends(get_product_service),
):
    """
    修改商品信息

    未上传图片或图片为空时保留原图片
    """
    image = await ImagePayload.from_upload(img)
    product = await asyncio.to_thread(service.update_product, product_no, request, image)
    return success_response(data=product, msg="商品修改成功")


# 商品删除接口
@router.delete("/{product_no}")
def remove_product(
        product_no: int,
        service: ProductService = Depends(get_product_service),
):
    """删除商品及其图片"""
    service.remove_product(product_no)
    return success_response(data=None, msg="商品删除成功")
