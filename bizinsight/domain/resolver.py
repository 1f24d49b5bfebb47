"""
指标解析器 - 将异构输入规范化为 ResolvedMetrics

输入可能来自：
- 扁平查询参数（snake_case）
- 前端 JSON（camelCase）
- 嵌套的 business_metrics / businessMetrics 对象

字段查找通过 FIELD_SOURCES 映射表按优先级进行，
派生字段在可计算时由基础字段推导。
"""

import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bizinsight.domain.models import (
    DEFAULT_MONTHS,
    MetricResolution,
    ResolvedMetrics,
)


INVALID_INSIGHTS_MESSAGE = "Invalid insights data"

# 嵌套的备用结构所在的键
ALTERNATE_KEYS: Tuple[str, ...] = ("business_metrics", "businessMetrics")


def _paths(*names: str) -> List[Tuple[str, ...]]:
    """主结构路径在前，备用嵌套结构路径在后"""
    primary = [(name,) for name in names]
    alternate = [(key, name) for key in ALTERNATE_KEYS for name in names]
    return primary + alternate


# (规范字段, 候选路径列表)，按优先级排列
FIELD_SOURCES: List[Tuple[str, List[Tuple[str, ...]]]] = [
    ("current_revenue", _paths("current_revenue", "currentRevenue", "revenue")),
    ("previous_revenue", _paths("previous_revenue", "previousRevenue")),
    ("total_expenses", _paths("total_expenses", "totalExpenses", "expenses")),
    ("customer_base", _paths("customer_base", "customerBase", "customers")),
    ("months", _paths("months")),
    ("industry", _paths("industry")),
    ("growth_rate", _paths("growth_rate", "growthRate", "revenueGrowth")),
    ("profit_margin", _paths("profit_margin", "profitMargin")),
    ("average_revenue_per_month", _paths("average_revenue_per_month", "averageRevenuePerMonth")),
]

_SOURCES = dict(FIELD_SOURCES)


# ==================== 数值转换 ====================

def to_number(value: Any) -> Optional[float]:
    """
    将任意输入转换为有限浮点数

    Returns:
        float 或 None（无法解析、空字符串、NaN/Inf、布尔值）
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_amount(value: Any) -> Optional[float]:
    """非负金额/数量，负数视为无法解析"""
    number = to_number(value)
    if number is None or number < 0:
        return None
    return number


def to_months(value: Any) -> Optional[int]:
    """正整数月份"""
    number = to_number(value)
    if number is None or number <= 0 or not number.is_integer():
        return None
    return int(number)


# ==================== 派生计算 ====================

def _finite(number: Optional[float]) -> Optional[float]:
    """极端输入下的溢出结果视为无法计算"""
    if number is None or not math.isfinite(number):
        return None
    return number


def calculate_growth_rate(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    """营收增长率（%），上期营收为 0 或缺失时不计算"""
    if current is None or previous is None or previous == 0:
        return None
    return _finite((current - previous) / previous * 100)


def calculate_profit_margin(revenue: Optional[float], expenses: Optional[float]) -> Optional[float]:
    """利润率（%），营收为 0 或缺失时不计算"""
    if revenue is None or expenses is None or revenue == 0:
        return None
    return _finite((revenue - expenses) / revenue * 100)


def calculate_average_revenue(revenue: Optional[float], months: Optional[int]) -> Optional[float]:
    if revenue is None or not months:
        return None
    return revenue / months


def calculate_customer_growth_rate(customer_base: float, months: int) -> float:
    """月均获客数年化后再按 12 个月基数放大（100 个客户 / 12 个月 -> 1200）"""
    if not months:
        return 0.0
    return _finite(customer_base / months * 12 * 12) or 0.0


def calculate_revenue_growth(current: float, target: float) -> float:
    """目标营收相对当前营收的增长（%），当前营收为 0 时返回 0"""
    if not current:
        return 0.0
    return (target - current) / current * 100


def calculate_profit_margin_improvement(current: float, target: float) -> float:
    """利润率提升（百分点），输入为小数形式"""
    return (target - current) * 100


# ==================== 解析 ====================

def _lookup(record: Mapping, paths: Sequence[Tuple[str, ...]]) -> Any:
    """按优先级返回第一个存在且非空的值"""
    for path in paths:
        node: Any = record
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                node = None
                break
            node = node[key]
        if node is not None and node != "":
            return node
    return None


def lookup_field(record: Mapping, field_name: str) -> Any:
    """按映射表查找规范字段的原始值"""
    return _lookup(record, _SOURCES[field_name])


def resolve(insights: Any) -> MetricResolution:
    """
    解析业务指标

    解析顺序：主结构 -> 备用嵌套结构 -> 算术推导 -> 0。
    average_revenue_per_month 在营收与月份都可用时总是重新计算，
    覆盖调用方提供的值。

    Args:
        insights: 调用方提供的原始记录

    Returns:
        MetricResolution: 输入不是字典时返回空指标和错误哨兵
    """
    if not isinstance(insights, Mapping):
        return MetricResolution(
            metrics=ResolvedMetrics(),
            error=INVALID_INSIGHTS_MESSAGE,
        )

    current = to_amount(lookup_field(insights, "current_revenue"))
    previous = to_amount(lookup_field(insights, "previous_revenue"))
    expenses = to_amount(lookup_field(insights, "total_expenses"))
    customers = to_amount(lookup_field(insights, "customer_base"))
    months = to_months(lookup_field(insights, "months")) or DEFAULT_MONTHS

    industry = lookup_field(insights, "industry")
    industry = str(industry).strip() if industry is not None else ""

    growth_rate = to_number(lookup_field(insights, "growth_rate"))
    if growth_rate is None:
        growth_rate = calculate_growth_rate(current, previous)

    profit_margin = to_number(lookup_field(insights, "profit_margin"))
    if profit_margin is None:
        profit_margin = calculate_profit_margin(current, expenses)

    average = to_number(lookup_field(insights, "average_revenue_per_month"))
    recomputed = calculate_average_revenue(current, months)
    if recomputed is not None:
        average = recomputed

    return MetricResolution(
        metrics=ResolvedMetrics(
            current_revenue=current or 0.0,
            previous_revenue=previous or 0.0,
            total_expenses=expenses or 0.0,
            customer_base=customers or 0.0,
            months=months,
            average_revenue_per_month=average or 0.0,
            growth_rate=growth_rate or 0.0,
            profit_margin=profit_margin or 0.0,
            industry=industry,
        )
    )


def merge_alternate(primary: Mapping, alternate: Optional[Mapping]) -> Dict[str, Any]:
    """将外部数据挂载为备用嵌套结构，主结构中的字段优先"""
    merged = dict(primary)
    if alternate:
        merged[ALTERNATE_KEYS[0]] = dict(alternate)
    return merged
