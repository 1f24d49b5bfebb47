"""
目标分析用例 - POST /business-analysis

比较当前与目标营收/利润率，并发生成增长机会与战略建议两份洞察列表。
"""

from typing import Any, Dict, List, Optional
import asyncio
import logging
import uuid

from bizinsight.domain.models import (
    BusinessContext,
    GoalAnalysis,
    GoalProjection,
)
from bizinsight.domain.resolver import (
    calculate_profit_margin_improvement,
    calculate_revenue_growth,
)
from bizinsight.infrastructure.logging import LogContext, current_request_id
from bizinsight.presentation.prompts import (
    GROWTH_OPPORTUNITIES_TASK,
    STRATEGIC_RECOMMENDATIONS_TASK,
    format_goal_prompt,
    parse_insight_list,
)
from bizinsight.use_cases.base import GenerativeUseCase


logger = logging.getLogger(__name__)

GROWTH_ANALYSIS_ERROR = "Error generating growth opportunities"
STRATEGY_ANALYSIS_ERROR = "Error generating strategic recommendations"

DEFAULT_RECOMMENDATIONS = [
    "Explore new market opportunities",
    "Optimize operational costs",
]
DEFAULT_RISKS = [
    "Market volatility",
    "Competitive landscape changes",
]


def project_goals(
    current_annual_revenue: float,
    target_annual_revenue: float,
    current_profit_margin: float,
    target_profit_margin: float,
) -> GoalProjection:
    """计算目标对比"""
    return GoalProjection(
        current_annual_revenue=current_annual_revenue,
        target_annual_revenue=target_annual_revenue,
        current_profit_margin=current_profit_margin,
        target_profit_margin=target_profit_margin,
        revenue_growth=calculate_revenue_growth(
            current_annual_revenue, target_annual_revenue
        ),
        profit_margin_improvement=calculate_profit_margin_improvement(
            current_profit_margin, target_profit_margin
        ),
    )


class AnalyzeBusinessGoalsUseCase(GenerativeUseCase[GoalAnalysis]):
    """
    目标分析用例

    输入：业务身份 + 当前/目标营收与利润率
    输出：两部分洞察列表 + 风险列表
    """

    async def execute(
        self,
        context: BusinessContext,
        current_annual_revenue: float,
        target_annual_revenue: float,
        current_profit_margin: float,
        target_profit_margin: float,
        raw_params: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> GoalAnalysis:
        request_id = request_id or current_request_id() or str(uuid.uuid4())
        projection = project_goals(
            current_annual_revenue,
            target_annual_revenue,
            current_profit_margin,
            target_profit_margin,
        )

        with LogContext(logger, "生成目标分析"):
            growth_text, strategy_text = await asyncio.gather(
                self._generate_or_sentinel(
                    format_goal_prompt(projection, context, GROWTH_OPPORTUNITIES_TASK),
                    GROWTH_ANALYSIS_ERROR,
                ),
                self._generate(
                    format_goal_prompt(projection, context, STRATEGIC_RECOMMENDATIONS_TASK),
                ),
            )

        return GoalAnalysis(
            request_id=request_id,
            context=context,
            projection=projection,
            growth_opportunities=parse_insight_list(growth_text),
            strategic_recommendations=self._recommendations(strategy_text),
            risks=list(DEFAULT_RISKS),
            raw_params=dict(raw_params or {}),
        )

    def _recommendations(self, text: Optional[str]) -> List[str]:
        """
        战略建议列表

        生成失败时在错误提示后附上静态建议；模型未配置或输出中
        没有可用条目时直接返回静态建议。
        """
        if text is None:
            return [STRATEGY_ANALYSIS_ERROR] + DEFAULT_RECOMMENDATIONS
        items = parse_insight_list(text) if self.text_generator.available else []
        return items or list(DEFAULT_RECOMMENDATIONS)
