import logging
import sys
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from automart.api.dependencies import get_uploader
from automart.api.v1.api import api_router
from automart.core.config import settings
from automart.db.base import init_db
from automart.infrastructure.exceptions import AutomartError
from automart.infrastructure.response import standard_response, error_response, unauthorized_response

# 降低watchfiles日志级别，避免频繁输出
logging.getLogger('watchfiles').setLevel(logging.ERROR)
logging.getLogger('watchfiles.main').setLevel(logging.ERROR)

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    description="AutoMart 商品库存管理API"
)

# 配置CORS - 重要: 必须在其他中间件之前添加
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 所有错误统一为 {"code", "data", "msg"} 格式，HTTP状态码与 code 一致
@app.exception_handler(AutomartError)
async def automart_error_handler(request: Request, exc: AutomartError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} 业务异常: {exc.code} {exc.message}")
    return JSONResponse(
        content=error_response(msg=exc.message, code=exc.status_code, data=exc.to_dict()),
        status_code=exc.status_code,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 401:
        content = unauthorized_response(msg=f"未授权访问: {exc.detail}")
    else:
        content = error_response(msg=str(exc.detail), code=exc.status_code)
    return JSONResponse(
        content=content,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 表单依赖中构造请求模型时抛出的是 pydantic.ValidationError
    errors = exc.errors() if hasattr(exc, "errors") else []
    return JSONResponse(
        content=error_response(
            msg="请求参数校验失败",
            code=422,
            data={"errors": [{"loc": list(e.get("loc", [])), "msg": e.get("msg")} for e in errors]},
        ),
        status_code=422,
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} 未处理异常: {str(exc)}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        content=error_response(msg="服务器内部错误", code=500),
        status_code=500,
    )


# 包含API路由
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.on_event("startup")
async def startup_db_client():
    """
    应用启动时初始化数据库和对象存储
    """
    logger.info("正在初始化数据库...")
    try:
        init_db()
        logger.info("数据库初始化成功")
    except Exception as e:
        logger.error(f"数据库初始化失败: {str(e)}")
        logger.error(traceback.format_exc())
        logger.warning("应用将继续启动，但数据库功能可能不可用")

    # 初始化MinIO存储桶
    try:
        logger.info("初始化MinIO存储...")
        if get_uploader().storage.initialize():
            logger.info("MinIO初始化完成")
        else:
            logger.warning("MinIO初始化失败，商品图片上传将不可用")
    except Exception as e:
        logger.error(f"MinIO初始化失败: {str(e)}")


@app.get("/")
async def root():
    """健康检查接口"""
    return standard_response(
        data={
            "status": "online",
            "version": "0.1.0"
        },
        msg="AutoMart API服务正在运行"
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("automart.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
