"""
基础设施层 - 横切关注点

包含：
- logging: 结构化日志系统
- errors: 错误定义与标准化
- security: OPTIONS 应答与安全头中间件
"""

from bizinsight.infrastructure.logging import (
    setup_logging,
    bind_request_id,
    reset_request_id,
    current_request_id,
    log_payload_keys,
    LogContext,
    RequestIdFilter,
    JsonLineFormatter,
    ConsoleFormatter,
)
from bizinsight.infrastructure.errors import (
    BizInsightError,
    InvalidRequestError,
    InvalidInsightsError,
    ParameterValidationError,
    UpstreamServiceError,
    MethodNotAllowedError,
    ErrorHandler,
)
from bizinsight.infrastructure.security import (
    OptionsResponseMiddleware,
    SecurityHeadersMiddleware,
)

__all__ = [
    # 日志
    "setup_logging",
    "bind_request_id",
    "reset_request_id",
    "current_request_id",
    "log_payload_keys",
    "LogContext",
    "RequestIdFilter",
    "JsonLineFormatter",
    "ConsoleFormatter",
    # 错误
    "BizInsightError",
    "InvalidRequestError",
    "InvalidInsightsError",
    "ParameterValidationError",
    "UpstreamServiceError",
    "MethodNotAllowedError",
    "ErrorHandler",
    # 中间件
    "OptionsResponseMiddleware",
    "SecurityHeadersMiddleware",
]
