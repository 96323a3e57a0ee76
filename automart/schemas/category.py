from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """
    商品分类创建请求模型

    code 为业务主键，创建后不可修改
    """
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)


class CategoryResponse(BaseModel):
    id: int
    code: str
    name: str

    @classmethod
    def of(cls, category) -> "CategoryResponse":
        return cls(**category.to_dict())
