"""
API 请求/响应模型 - Pydantic Schema 定义

所有 API 的输入输出都通过这些模型定义，
确保类型安全和自动文档生成。
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Union
from datetime import datetime

from bizinsight.domain.models import (
    BusinessContext,
    BusinessInsights,
    BusinessReport,
    GoalAnalysis,
    ResolvedMetrics,
)


class CamelModel(BaseModel):
    """以 camelCase 输出的响应模型"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== 请求模型 ====================

class BusinessAnalysisRequest(BaseModel):
    """目标分析请求（同时接受 camelCase 和 snake_case）"""
    model_config = ConfigDict(extra="ignore")

    business_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("businessName", "business_name"),
        description="企业名称",
    )
    industry: Optional[str] = Field(default=None, description="所属行业")
    goals: Optional[Union[str, List[str]]] = Field(default=None, description="业务目标")
    challenges: Optional[Union[str, List[str]]] = Field(default=None, description="当前挑战")
    current_annual_revenue: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("currentAnnualRevenue", "current_annual_revenue"),
        description="当前年营收",
    )
    target_annual_revenue: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("targetAnnualRevenue", "target_annual_revenue"),
        description="目标年营收",
    )
    current_profit_margin: float = Field(
        ...,
        ge=-1,
        le=1,
        validation_alias=AliasChoices("currentProfitMargin", "current_profit_margin"),
        description="当前利润率（小数，0.15 表示 15%）",
    )
    target_profit_margin: float = Field(
        ...,
        ge=-1,
        le=1,
        validation_alias=AliasChoices("targetProfitMargin", "target_profit_margin"),
        description="目标利润率（小数）",
    )

    @field_validator('goals', 'challenges')
    @classmethod
    def join_items(cls, v):
        """列表形式的目标/挑战合并为一段文本"""
        if isinstance(v, list):
            v = ", ".join(item.strip() for item in v if item and item.strip())
        return v.strip() if v else None

    def to_context(self) -> BusinessContext:
        return BusinessContext(
            business_name=self.business_name,
            industry=self.industry,
            goals=self.goals,
            challenges=self.challenges,
        )


# ==================== 响应模型 ====================

class MetricsData(BaseModel):
    """规范化业务指标"""
    current_revenue: float
    previous_revenue: float
    total_expenses: float
    customer_base: float
    months: int
    average_revenue_per_month: float
    growth_rate: float
    profit_margin: float
    industry: str = ""

    @classmethod
    def from_domain(cls, metrics: ResolvedMetrics) -> "MetricsData":
        return cls(**metrics.to_dict())


class BusinessReportResponse(BaseModel):
    """GET / 报告响应"""
    request_id: str = Field(..., description="请求追踪 ID")
    industry: str = Field(..., description="所属行业")
    business_metrics: MetricsData = Field(..., description="规范化业务指标")
    assessment: Dict[str, Any] = Field(default_factory=dict, description="评估 API 原始数据")
    timestamp: datetime = Field(default_factory=datetime.now)


class BusinessInsightsResponse(CamelModel):
    """业务洞察响应"""
    request_id: str
    industry: str
    revenue_growth: float = Field(..., description="营收增长率（%）")
    profit_margin: float = Field(..., description="利润率（%）")
    customer_growth_rate: float = Field(..., description="客户增长率")
    average_revenue_per_month: float = Field(..., description="月均营收")
    business_metrics: MetricsData
    growth_opportunities: str = Field(..., description="增长机会洞察")
    strategic_recommendations: str = Field(..., description="战略建议洞察")
    timestamp: datetime = Field(default_factory=datetime.now)


class BusinessAnalysisResponse(CamelModel):
    """目标分析响应"""
    request_id: str
    business_name: Optional[str] = None
    industry: Optional[str] = None
    revenue_growth: float = Field(..., description="目标营收增长（%）")
    profit_margin_improvement: float = Field(..., description="利润率提升（百分点）")
    growth_opportunities: List[str] = Field(default_factory=list)
    strategic_recommendations: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    raw_params: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str = Field(..., description="服务状态")
    timestamp: datetime = Field(..., description="检查时间")
    version: str = Field(..., description="API 版本")
    components: Dict[str, str] = Field(default_factory=dict, description="组件状态")


class ErrorResponse(BaseModel):
    """错误响应"""
    error: str = Field(..., description="错误信息")
    details: Optional[str] = Field(default=None, description="错误详情")
    missing_params: Optional[List[str]] = Field(default=None, description="缺失的参数")
    invalid_params: Optional[List[str]] = Field(default=None, description="无效的参数")


# ==================== 转换函数 ====================

def report_to_response(report: BusinessReport) -> BusinessReportResponse:
    """将 BusinessReport 转换为 API 响应"""
    return BusinessReportResponse(
        request_id=report.request_id,
        industry=report.metrics.industry,
        business_metrics=MetricsData.from_domain(report.metrics),
        assessment=report.assessment,
        timestamp=report.timestamp,
    )


def insights_to_response(result: BusinessInsights) -> BusinessInsightsResponse:
    """将 BusinessInsights 转换为 API 响应"""
    metrics = result.metrics
    return BusinessInsightsResponse(
        request_id=result.request_id,
        industry=metrics.industry,
        revenue_growth=metrics.growth_rate,
        profit_margin=metrics.profit_margin,
        customer_growth_rate=result.customer_growth_rate,
        average_revenue_per_month=metrics.average_revenue_per_month,
        business_metrics=MetricsData.from_domain(metrics),
        growth_opportunities=result.growth_opportunities,
        strategic_recommendations=result.strategic_recommendations,
        timestamp=result.timestamp,
    )


def analysis_to_response(result: GoalAnalysis) -> BusinessAnalysisResponse:
    """将 GoalAnalysis 转换为 API 响应"""
    return BusinessAnalysisResponse(
        request_id=result.request_id,
        business_name=result.context.business_name,
        industry=result.context.industry,
        revenue_growth=result.projection.revenue_growth,
        profit_margin_improvement=result.projection.profit_margin_improvement,
        growth_opportunities=result.growth_opportunities,
        strategic_recommendations=result.strategic_recommendations,
        risks=result.risks,
        raw_params=result.raw_params,
        timestamp=result.timestamp,
    )
