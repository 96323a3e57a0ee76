"""商品图片存储基础设施组件导出"""

from .uploader import Uploader, get_default_uploader

__all__ = [
    "Uploader",
    "get_default_uploader",
]
