"""
日志系统 - 请求级诊断

- 请求 ID 通过 contextvars 在一次请求内传播，由 RequestIdFilter 注入每条记录，
  调用方无需逐条传入
- 开发环境输出单行文本，生产环境输出 JSON 行
- 请求负载只在 DEBUG 级别记录键名，取值从不写入日志
"""

from collections.abc import Mapping
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, List, Optional
import json
import logging
import sys
import time


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

NO_REQUEST_ID = "-"

# 记录上可能携带的诊断字段，按此顺序写入 JSON
DIAGNOSTIC_FIELDS = ("request_id", "operation", "status_code", "duration_ms")

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s%(elapsed)s"


# ==================== 请求 ID ====================

def bind_request_id(request_id: Optional[str]) -> Token:
    """绑定当前请求的 ID，返回用于恢复的 token"""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def current_request_id() -> Optional[str]:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """为记录补上当前请求 ID，未绑定时为 "-" """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = _request_id.get() or NO_REQUEST_ID
        return True


# ==================== 格式化 ====================

class JsonLineFormatter(logging.Formatter):
    """每条记录一行 JSON，只写入实际存在的诊断字段"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in DIAGNOSTIC_FIELDS:
            value = getattr(record, name, None)
            if value is not None and value != NO_REQUEST_ID:
                entry[name] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """开发环境单行文本，带耗时时追加在消息末尾"""

    def __init__(self):
        super().__init__(CONSOLE_FORMAT, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = getattr(record, "request_id", None) or NO_REQUEST_ID
        duration = getattr(record, "duration_ms", None)
        record.elapsed = f" ({duration:.1f}ms)" if duration is not None else ""
        return super().format(record)


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """
    配置根日志记录器

    处理器上挂载 RequestIdFilter，子记录器传播上来的记录同样带请求 ID。
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLineFormatter() if json_format else ConsoleFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return root


# ==================== 负载与耗时 ====================

def payload_keys(payload: Any) -> List[str]:
    if isinstance(payload, Mapping):
        return sorted(str(key) for key in payload)
    return []


def log_payload_keys(logger: logging.Logger, label: str, payload: Any) -> None:
    """DEBUG 级别下记录负载的键名"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s 字段: %s", label, payload_keys(payload))


class LogContext:
    """
    记录一次操作的开始、结束与耗时

    异常照常抛出，失败日志附带异常栈。
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.duration_ms: Optional[float] = None
        self._started = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info("开始 %s", self.operation, extra={"operation": self.operation})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self._started) * 1000
        extra = {"operation": self.operation, "duration_ms": self.duration_ms}
        if exc_type is None:
            self.logger.info("完成 %s", self.operation, extra=extra)
        else:
            self.logger.error(
                "失败 %s: %s", self.operation, exc_val,
                extra=extra,
                exc_info=(exc_type, exc_val, exc_tb),
            )
        return False
