"""
端口层 - 定义与外部世界交互的接口

包含：
- AssessmentPort: 业务评估 REST API 接口
- TextGenerationPort: 文本生成接口
"""

from bizinsight.ports.interfaces import (
    AssessmentPort,
    TextGenerationPort,
    PortError,
    DataUnavailableError,
    GenerationError,
)

__all__ = [
    "AssessmentPort",
    "TextGenerationPort",
    "PortError",
    "DataUnavailableError",
    "GenerationError",
]
