"""
Custom exceptions for the AutoMart back-office.

Every business failure derives from AutomartError, which carries the HTTP
status the API layer answers with. ImageUploadError belongs to the
infrastructure layer and is translated by the services.
"""
from typing import Any, Dict, Optional


class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""
    pass


class ImageUploadError(InfrastructureError, IOError):
    """Raised when an object could not be written to the image store."""

    def __init__(self, object_name: str, reason: str = ""):
        self.object_name = object_name
        self.reason = reason
        message = f"图片上传失败: {object_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class AutomartError(Exception):
    """业务异常基类"""

    code: str = "AUTOMART_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result = {"error": self.code}
        if self.details:
            result["details"] = self.details
        return result


class CategoryNotFoundError(AutomartError):
    code = "CATEGORY_NOT_FOUND"
    status_code = 404

    def __init__(self, category_code: str):
        super().__init__("商品分类不存在", {"category_code": category_code})


class DuplicateCategoryError(AutomartError):
    code = "DUPLICATE_CATEGORY"
    status_code = 409

    def __init__(self, category_code: str):
        super().__init__("商品分类编码已存在", {"category_code": category_code})


class ProductNotFoundError(AutomartError):
    code = "PRODUCT_NOT_FOUND"
    status_code = 404

    def __init__(self, product_no: Optional[int], message: str = "商品不存在"):
        super().__init__(message, {"product_no": product_no})


class ForbiddenDeleteError(ProductNotFoundError):
    """删除被拒绝：目标商品不存在"""

    code = "FORBIDDEN_DELETE"
    status_code = 403

    def __init__(self, product_no: Optional[int], message: str = "商品不存在，无法删除"):
        super().__init__(product_no, message)


class CategoryInUseError(AutomartError):
    """分类仍被商品引用，不能删除"""

    code = "CATEGORY_IN_USE"
    status_code = 409

    def __init__(self, category_code: str, product_count: int):
        super().__init__(
            "该分类下仍有商品，无法删除",
            {"category_code": category_code, "product_count": product_count},
        )


class InvalidDateFormatError(AutomartError):
    code = "INVALID_DATE_FORMAT"
    status_code = 400

    def __init__(self, value: str, expected_format: str):
        super().__init__(
            "入库日期格式不正确",
            {"receiving_date": value, "expected_format": expected_format},
        )


class ImageUploadFailedError(AutomartError):
    code = "IMAGE_UPLOAD_FAILED"
    status_code = 500

    def __init__(self, object_name: str):
        super().__init__("商品图片上传失败", {"object_name": object_name})


class DuplicateUserError(AutomartError):
    code = "DUPLICATE_USER"
    status_code = 409

    def __init__(self, email: str):
        super().__init__("该邮箱已注册", {"email": email})


class InvalidCredentialsError(AutomartError):
    code = "INVALID_CREDENTIALS"
    status_code = 401

    def __init__(self, message: str = "邮箱或密码错误"):
        super().__init__(message)
