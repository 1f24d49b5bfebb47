"""
表现层 - 提示词构建与模型输出解析

LLM 仅通过这一层的提示词被使用。
"""

from bizinsight.presentation.prompts import (
    GROWTH_OPPORTUNITIES_TASK,
    STRATEGIC_RECOMMENDATIONS_TASK,
    build_messages,
    format_prompt,
    format_goal_prompt,
    parse_insight_list,
)

__all__ = [
    "GROWTH_OPPORTUNITIES_TASK",
    "STRATEGIC_RECOMMENDATIONS_TASK",
    "build_messages",
    "format_prompt",
    "format_goal_prompt",
    "parse_insight_list",
]
