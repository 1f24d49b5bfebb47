"""
适配器层 - 端口接口的具体实现

包含：
- AssessmentAPIAdapter: 业务评估 REST API 适配器
- LiteLLMAdapter: LiteLLM 文本生成适配器
- NullTextGenerator: 未配置 LLM 时的降级实现
"""

from bizinsight.adapters.assessment_adapter import AssessmentAPIAdapter
from bizinsight.adapters.llm_adapter import LiteLLMAdapter, NullTextGenerator

__all__ = [
    "AssessmentAPIAdapter",
    "LiteLLMAdapter",
    "NullTextGenerator",
]
