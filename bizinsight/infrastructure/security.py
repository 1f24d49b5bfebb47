"""
HTTP 中间件 - OPTIONS 应答与安全头

CORS 由 FastAPI 的 CORSMiddleware 处理（含预检请求）；
这里只补充两点：
- 不是预检的 OPTIONS 请求（无 Origin 或无 Access-Control-Request-Method）
  同样返回空 200，而不是落到路由层的 405
- 基本安全响应头
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class OptionsResponseMiddleware(BaseHTTPMiddleware):
    """
    OPTIONS 兜底中间件

    需要放在 CORSMiddleware 内侧：预检请求由 CORSMiddleware 应答，
    到达这里的 OPTIONS 请求一律返回带宽松 CORS 头的空响应。
    """

    def __init__(self, app, allow_origin: str = "*"):
        super().__init__(app)
        self.headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": "*",
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.headers)
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    安全头中间件

    添加基本的安全响应头，报告类响应不缓存。
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"

        return response
