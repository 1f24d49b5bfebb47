"""
用例基类 - 定义用例的基本结构
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional
import logging

from bizinsight.ports.interfaces import TextGenerationPort
from bizinsight.presentation.prompts import build_messages


T = TypeVar('T')

logger = logging.getLogger(__name__)

EMPTY_INSIGHTS_MESSAGE = "AI generated no specific insights"


class UseCase(ABC, Generic[T]):
    """
    用例基类

    所有用例都应继承此类，实现 execute 方法。
    用例只依赖端口接口，不依赖具体适配器实现。
    """

    @abstractmethod
    def execute(self, *args, **kwargs) -> T:
        """
        执行用例

        Returns:
            T: 用例执行结果
        """
        pass


class GenerativeUseCase(UseCase[T]):
    """
    需要调用文本生成的用例基类

    文本生成失败不会中断请求，而是以哨兵文本替代。
    """

    def __init__(
        self,
        text_generator: TextGenerationPort,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        """
        初始化用例

        Args:
            text_generator: 文本生成端口
            max_tokens: 最大输出 token 数
            temperature: 采样温度
        """
        self.text_generator = text_generator
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def _generate(self, prompt: str) -> Optional[str]:
        """调用文本生成，失败时返回 None（已记录警告）"""
        try:
            text = await self.text_generator.generate(
                build_messages(prompt),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Error generating AI insights: %s", e)
            return None
        return (text or "").strip()

    async def _generate_or_sentinel(self, prompt: str, sentinel: str) -> str:
        """调用文本生成，失败时返回哨兵文本"""
        text = await self._generate(prompt)
        if text is None:
            return sentinel
        return text or EMPTY_INSIGHTS_MESSAGE
