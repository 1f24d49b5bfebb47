"""
提示词构建与洞察解析

- format_prompt: 指标 + 业务上下文 -> 文本生成指令
- format_goal_prompt: 目标对比 -> 文本生成指令
- parse_insight_list: 模型原始输出 -> 洞察列表
"""

import re
from typing import List, Optional

from bizinsight.domain.models import (
    BusinessContext,
    GoalProjection,
    ResolvedMetrics,
)


GROWTH_OPPORTUNITIES_TASK = (
    "Identify the most promising growth opportunities for this business. "
    "Return a numbered list of concise, actionable items."
)
STRATEGIC_RECOMMENDATIONS_TASK = (
    "Provide strategic recommendations to improve profitability and reduce risk. "
    "Return a numbered list of concise, actionable items."
)

SYSTEM_PROMPT = (
    "You are an experienced business analyst. "
    "Use only the figures provided and do not invent data."
)

_ORDINAL_PREFIX = re.compile(r"^\d+\.\s*")


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _context_lines(context: Optional[BusinessContext]) -> List[str]:
    if context is None:
        return []
    lines = []
    if context.business_name:
        lines.append(f"- Business Name: {context.business_name}")
    if context.industry:
        lines.append(f"- Industry: {context.industry}")
    if context.goals:
        lines.append(f"- Goals: {context.goals}")
    if context.challenges:
        lines.append(f"- Challenges: {context.challenges}")
    return lines


def format_prompt(
    metrics: ResolvedMetrics,
    context: Optional[BusinessContext] = None,
    task: str = GROWTH_OPPORTUNITIES_TASK,
) -> str:
    """
    构建指标分析提示词

    Args:
        metrics: 已解析的业务指标
        context: 业务上下文（可选字段仅在存在时输出）
        task: 任务指令

    Returns:
        str: 提示词文本
    """
    lines = ["Analyze the following business metrics:"]
    lines += [
        f"- Current Revenue: {_money(metrics.current_revenue)}",
        f"- Previous Revenue: {_money(metrics.previous_revenue)}",
        f"- Total Expenses: {_money(metrics.total_expenses)}",
        f"- Customer Base: {metrics.customer_base:,.0f}",
        f"- Period: {metrics.months} months",
        f"- Average Revenue per Month: {_money(metrics.average_revenue_per_month)}",
        f"- Revenue Growth Rate: {metrics.growth_rate:.2f}%",
        f"- Profit Margin: {metrics.profit_margin:.2f}%",
    ]
    if metrics.industry and not (context and context.industry):
        lines.append(f"- Industry: {metrics.industry}")

    extra = _context_lines(context)
    if extra:
        lines.append("")
        lines.append("Business context:")
        lines += extra

    lines.append("")
    lines.append(task)
    return "\n".join(lines)


def format_goal_prompt(
    projection: GoalProjection,
    context: Optional[BusinessContext] = None,
    task: str = STRATEGIC_RECOMMENDATIONS_TASK,
) -> str:
    """构建目标对比分析提示词"""
    lines = ["Generate strategic business recommendations based on these metrics:"]
    lines += [
        f"- Current Annual Revenue: {_money(projection.current_annual_revenue)}",
        f"- Target Annual Revenue: {_money(projection.target_annual_revenue)}",
        f"- Current Profit Margin: {projection.current_profit_margin * 100:.2f}%",
        f"- Target Profit Margin: {projection.target_profit_margin * 100:.2f}%",
        f"- Revenue Growth Projection: {projection.revenue_growth:.2f}%",
        f"- Profit Margin Improvement: {projection.profit_margin_improvement:.2f} percentage points",
    ]

    extra = _context_lines(context)
    if extra:
        lines.append("")
        lines.append("Business context:")
        lines += extra

    lines.append("")
    lines.append(task)
    return "\n".join(lines)


def build_messages(prompt: str) -> List[dict]:
    """包装为 role/content 消息列表"""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def parse_insight_list(raw_text: Optional[str]) -> List[str]:
    """
    将模型输出拆分为洞察列表

    按行拆分，去除空行和行首的 "N. " 序号，保持原顺序。
    """
    if not raw_text:
        return []
    insights = []
    for line in raw_text.splitlines():
        line = line.strip()
        if not line:
            continue
        line = _ORDINAL_PREFIX.sub("", line)
        if line:
            insights.append(line)
    return insights
