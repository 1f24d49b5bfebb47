"""
LLM 适配器 - 实现 TextGenerationPort

使用 LiteLLM 调用托管的文本生成模型。
"""

from typing import Dict, List, Optional

from litellm import acompletion

from bizinsight.ports.interfaces import (
    TextGenerationPort,
    GenerationError,
)


NO_AI_INSIGHTS_MESSAGE = "No AI insights available"


class LiteLLMAdapter(TextGenerationPort):
    """
    LiteLLM 适配器

    实现 TextGenerationPort 接口，单次调用，不做重试。
    """

    def __init__(
        self,
        provider: str = "openai",
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: int = 30,
    ):
        """
        初始化适配器

        Args:
            provider: LLM 提供商
            model: 模型名称
            api_key: API 密钥（可选）
            api_base: API 基础 URL（可选）
            timeout: 请求超时时间（秒）
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout

    @property
    def model_name(self) -> str:
        return f"{self.provider}/{self.model}" if self.provider else self.model

    async def generate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """调用 LLM"""
        params = {}
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if temperature is not None:
            params["temperature"] = temperature

        try:
            response = await acompletion(
                model=self.model_name,
                messages=messages,
                api_key=self.api_key,
                api_base=self.api_base,
                timeout=self.timeout,
                **params,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            raise GenerationError(
                f"LLM 调用失败: {str(e)}",
                source=self.model_name,
            )


class NullTextGenerator(TextGenerationPort):
    """
    空文本生成器

    未配置 LLM 时在启动阶段注入，总是返回固定的降级文本。
    """

    def __init__(self, message: str = NO_AI_INSIGHTS_MESSAGE):
        self.message = message

    @property
    def available(self) -> bool:
        return False

    async def generate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        return self.message
