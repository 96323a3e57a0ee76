from dataclasses import dataclass
from typing import Optional

from fastapi import Form, UploadFile
from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    """商品公共字段"""
    name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0)
    cost: int = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    min_stock: int = Field(..., ge=0)
    # 原始字符串，由商品模型按 RECEIVING_DATE_FORMAT 解析
    receiving_date: str
    code: str = Field(..., max_length=64)
    location: str = Field("", max_length=255)


class ProductSaveRequest(ProductBase):
    """
    商品创建请求模型

    图片以 multipart 文件单独上传
    """
    category_code: str = Field(..., min_length=1, max_length=64)

    @classmethod
    def as_form(
            cls,
            category_code: str = Form(...),
            name: str = Form(...),
            price: int = Form(...),
            cost: int = Form(...),
            stock: int = Form(...),
            min_stock: int = Form(...),
            receiving_date: str = Form(...),
            code: str = Form(...),
            location: str = Form(""),
    ) -> "ProductSaveRequest":
        return cls(
            category_code=category_code, name=name, price=price, cost=cost, stock=stock,
            min_stock=min_stock, receiving_date=receiving_date, code=code, location=location,
        )


class ProductUpdateRequest(ProductBase):
    """
    商品修改请求模型

    分类不可修改；图片可选，为空时保留原图片
    """

    @classmethod
    def as_form(
            cls,
            name: str = Form(...),
            price: int = Form(...),
            cost: int = Form(...),
            stock: int = Form(...),
            min_stock: int = Form(...),
            receiving_date: str = Form(...),
            code: str = Form(...),
            location: str = Form(""),
    ) -> "ProductUpdateRequest":
        return cls(
            name=name, price=price, cost=cost, stock=stock, min_stock=min_stock,
            receiving_date=receiving_date, code=code, location=location,
        )


class ProductResponse(BaseModel):
    """商品响应视图"""
    no: int
    name: str
    price: int
    cost: int
    stock: int
    min_stock: int
    receiving_date: Optional[str] = None
    code: Optional[str] = None
    location: Optional[str] = None
    img_url: str = ""
    category_code: Optional[str] = None

    @classmethod
    def of(cls, product) -> "ProductResponse":
        return cls(**product.to_dict())


@dataclass
class ImagePayload:
    """上传图片的内容与类型"""
    content: bytes
    content_type: Optional[str] = None
    filename: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.content

    @classmethod
    async def from_upload(cls, upload: Optional[UploadFile]) -> Optional["ImagePayload"]:
        """读取 FastAPI 上传文件，未提供文件时返回 None"""
        if upload is None:
            return None
        content = await upload.read()
        return cls(content=content, content_type=upload.content_type, filename=upload.filename)
