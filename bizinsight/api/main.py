"""
BizInsight API - 主应用入口

基于 Clean/Hexagonal Architecture 的业务指标分析服务。

特性：
- 多种输入结构的指标规范化
- 可选的 LLM 洞察生成（失败自动降级）
- 统一的 JSON 错误响应
- 按请求追踪的结构化日志
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import time
import uuid
import logging

from bizinsight.api.routes import health_router, insights_router, report_router
from bizinsight.api.dependencies import get_settings, get_service_container
from bizinsight.infrastructure.errors import (
    BizInsightError,
    ErrorHandler,
    InvalidRequestError,
    MethodNotAllowedError,
)
from bizinsight.infrastructure.logging import (
    bind_request_id,
    reset_request_id,
    setup_logging,
)
from bizinsight.infrastructure.security import (
    OptionsResponseMiddleware,
    SecurityHeadersMiddleware,
)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info("BizInsight API 正在启动...")

    # 预热服务容器，文本生成器的实现在此确定
    get_service_container()
    logger.info("服务容器初始化完成")

    yield

    logger.info("BizInsight API 正在关闭...")


def _validation_details(exc: RequestValidationError) -> str:
    """将 pydantic 校验错误压缩为一行说明"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
# BizInsight API

业务指标分析服务：规范化业务指标、计算派生比率，并可选地生成 AI 洞察。

- `GET /`：基于查询参数与第三方评估数据的指标报告
- `POST /business-insights`：指标 + 两段自由文本洞察
- `POST /business-analysis`：当前/目标对比 + 洞察列表
        """,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # 非预检的 OPTIONS 请求直接返回空 200（最内层，仍经过日志与安全头）
    app.add_middleware(OptionsResponseMiddleware, allow_origin=settings.CORS_ORIGIN)

    # 安全头中间件
    app.add_middleware(SecurityHeadersMiddleware)

    # 请求日志中间件
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        # 生成请求 ID，本次请求内的日志记录都会带上它
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = bind_request_id(request_id)

        logger.info("%s %s", request.method, request.url.path)

        try:
            response = await call_next(request)

            duration = (time.time() - start_time) * 1000
            logger.info(
                "完成 %s",
                response.status_code,
                extra={'status_code': response.status_code, 'duration_ms': duration},
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.2f}ms"

            return response

        except Exception as e:
            duration = (time.time() - start_time) * 1000
            logger.error("错误: %s", e, extra={'duration_ms': duration})
            raise

        finally:
            reset_request_id(token)

    # CORS 中间件（最外层，预检请求由它应答）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    # ==================== 异常处理 ====================

    @app.exception_handler(BizInsightError)
    async def bizinsight_exception_handler(request: Request, exc: BizInsightError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = InvalidRequestError(details=_validation_details(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # 未匹配的方法/路径组合统一返回 405
        if exc.status_code in (404, 405):
            error = MethodNotAllowedError(request.method, request.url.path)
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("未处理的异常: %s", exc, exc_info=True)
        error = ErrorHandler.handle_exception(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    # 注册路由
    app.include_router(report_router)
    app.include_router(insights_router)
    app.include_router(health_router)

    return app


# 创建应用实例
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "bizinsight.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
