"""
核心领域模型 - 所有业务实体和值对象的定义

设计原则：
1. 不可变性：使用 frozen=True 确保模型不可变
2. 类型安全：严格类型注解
3. 可序列化：支持 JSON 序列化
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any


DEFAULT_MONTHS = 12


# ==================== 枚举类型 ====================

class ErrorCode(str, Enum):
    """错误码"""
    SUCCESS = "success"
    INVALID_REQUEST = "invalid_request"
    MISSING_PARAMETERS = "missing_parameters"
    INVALID_PARAMETERS = "invalid_parameters"
    INVALID_INSIGHTS = "invalid_insights"
    UPSTREAM_ERROR = "upstream_error"
    GENERATION_ERROR = "generation_error"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INTERNAL_ERROR = "internal_error"


# ==================== 值对象 ====================

@dataclass(frozen=True)
class ResolvedMetrics:
    """规范化后的业务指标（所有数值字段均已解析）"""
    current_revenue: float = 0.0
    previous_revenue: float = 0.0
    total_expenses: float = 0.0
    customer_base: float = 0.0
    months: int = DEFAULT_MONTHS
    average_revenue_per_month: float = 0.0
    growth_rate: float = 0.0       # 百分比
    profit_margin: float = 0.0     # 百分比
    industry: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典（用于 JSON 序列化）"""
        return asdict(self)


@dataclass(frozen=True)
class MetricResolution:
    """指标解析结果：指标本身 + 可选的错误哨兵信息"""
    metrics: ResolvedMetrics
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BusinessContext:
    """业务上下文（仅用于构建提示词）"""
    business_name: Optional[str] = None
    industry: Optional[str] = None
    goals: Optional[str] = None
    challenges: Optional[str] = None


@dataclass(frozen=True)
class GoalProjection:
    """目标对比：当前 vs 目标营收 / 利润率"""
    current_annual_revenue: float
    target_annual_revenue: float
    current_profit_margin: float   # 小数形式，0.15 表示 15%
    target_profit_margin: float
    revenue_growth: float          # 百分比
    profit_margin_improvement: float  # 百分点


# ==================== 结果模型 ====================

@dataclass(frozen=True)
class BusinessReport:
    """GET / 的报告结果"""
    request_id: str
    metrics: ResolvedMetrics
    assessment: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class BusinessInsights:
    """指标 + 两段自由文本洞察"""
    request_id: str
    metrics: ResolvedMetrics
    customer_growth_rate: float
    growth_opportunities: str
    strategic_recommendations: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class GoalAnalysis:
    """目标分析结果（两部分洞察列表）"""
    request_id: str
    context: BusinessContext
    projection: GoalProjection
    growth_opportunities: List[str]
    strategic_recommendations: List[str]
    risks: List[str]
    raw_params: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
