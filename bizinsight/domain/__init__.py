"""
领域模型层 - 核心业务实体、值对象与指标解析

包含：
- ResolvedMetrics: 规范化业务指标
- MetricResolution: 指标解析结果
- BusinessContext: 业务上下文
- GoalProjection: 目标对比
- resolve: 指标解析器入口
"""

from bizinsight.domain.models import (
    ErrorCode,
    ResolvedMetrics,
    MetricResolution,
    BusinessContext,
    GoalProjection,
    BusinessReport,
    BusinessInsights,
    GoalAnalysis,
)
from bizinsight.domain.resolver import (
    FIELD_SOURCES,
    INVALID_INSIGHTS_MESSAGE,
    resolve,
)

__all__ = [
    "ErrorCode",
    "ResolvedMetrics",
    "MetricResolution",
    "BusinessContext",
    "GoalProjection",
    "BusinessReport",
    "BusinessInsights",
    "GoalAnalysis",
    "FIELD_SOURCES",
    "INVALID_INSIGHTS_MESSAGE",
    "resolve",
]
