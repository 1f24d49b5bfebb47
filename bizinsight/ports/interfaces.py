"""
端口接口定义 - 依赖倒置的核心

所有外部服务交互都通过这些接口进行，
具体实现由适配器层提供。

设计原则：
1. 接口隔离：每个接口只包含相关的方法
2. 依赖倒置：用例层依赖接口，不依赖具体实现
3. 异常抽象：接口定义标准异常类型
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


# ==================== 异常定义 ====================

class PortError(Exception):
    """端口层基础异常"""
    def __init__(self, message: str, source: str = "unknown"):
        self.message = message
        self.source = source
        super().__init__(f"[{source}] {message}")


class DataUnavailableError(PortError):
    """数据不可用异常"""
    pass


class GenerationError(PortError):
    """文本生成失败异常"""
    pass


# ==================== 端口接口 ====================

class AssessmentPort(ABC):
    """业务评估端口 - 第三方评估 REST API"""

    @abstractmethod
    def fetch_assessment(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        获取业务评估数据

        Args:
            params: 与 GET / 相同的查询参数

        Returns:
            Dict: 评估 API 返回的 JSON 对象

        Raises:
            DataUnavailableError: 非 2xx 响应或网络错误
        """
        pass


class TextGenerationPort(ABC):
    """文本生成端口 - 托管的语言模型"""

    @property
    def available(self) -> bool:
        """是否接入了真实的语言模型"""
        return True

    @abstractmethod
    async def generate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        生成文本

        Args:
            messages: role/content 消息列表
            max_tokens: 最大输出 token 数（可选）
            temperature: 采样温度（可选）

        Returns:
            str: 生成的文本

        Raises:
            GenerationError: 调用失败
        """
        pass
