"""
错误处理 - 统一错误定义和处理

提供：
- 业务异常类层次（携带错误码与 HTTP 状态码）
- 错误响应体转换
- 未知异常标准化

所有失败仅终止当前请求，不做重试。
"""

from typing import Optional, Dict, Any, List
import logging

from bizinsight.domain.models import ErrorCode


logger = logging.getLogger(__name__)


# ==================== 异常类层次 ====================

class BizInsightError(Exception):
    """BizInsight 基础异常"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为错误响应体"""
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequestError(BizInsightError):
    """请求体无法解析或结构错误"""

    status_code = 400

    def __init__(self, details: Optional[str] = None, message: str = "Invalid request"):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_REQUEST,
            details=details,
        )


class InvalidInsightsError(BizInsightError):
    """指标解析器拒绝了输入"""

    status_code = 400

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INSIGHTS,
            details=details,
        )


class ParameterValidationError(BizInsightError):
    """查询参数缺失或无效（两类互不重叠，可同时出现）"""

    status_code = 400

    def __init__(self, missing: List[str], invalid: List[str]):
        self.missing = list(missing)
        self.invalid = list(invalid)
        if self.missing and self.invalid:
            message = "Missing or invalid parameters"
            error_code = ErrorCode.MISSING_PARAMETERS
        elif self.missing:
            message = "Missing required parameters"
            error_code = ErrorCode.MISSING_PARAMETERS
        else:
            message = "Invalid parameters"
            error_code = ErrorCode.INVALID_PARAMETERS
        super().__init__(message=message, error_code=error_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "missing_params": self.missing,
            "invalid_params": self.invalid,
        }


class UpstreamServiceError(BizInsightError):
    """上游 REST 依赖失败"""

    status_code = 500

    def __init__(self, service: str, reason: str):
        super().__init__(
            message=f"Failed to fetch data from {service}",
            error_code=ErrorCode.UPSTREAM_ERROR,
            details=reason,
        )


class MethodNotAllowedError(BizInsightError):
    """不支持的方法/路径组合"""

    status_code = 405

    def __init__(self, method: str, path: str):
        super().__init__(
            message="Method Not Allowed",
            error_code=ErrorCode.METHOD_NOT_ALLOWED,
            details=f"{method} {path} is not supported",
        )


# ==================== 错误处理工具 ====================

class ErrorHandler:
    """错误处理器"""

    @staticmethod
    def handle_exception(
        e: Exception,
        context: Optional[str] = None
    ) -> BizInsightError:
        """
        将异常转换为 BizInsightError

        Args:
            e: 原始异常
            context: 上下文信息

        Returns:
            BizInsightError: 标准化的错误
        """
        if isinstance(e, BizInsightError):
            return e

        details = str(e) or type(e).__name__
        if context:
            details = f"[{context}] {details}"

        return BizInsightError(
            message="Internal server error",
            error_code=ErrorCode.INTERNAL_ERROR,
            details=details,
        )
