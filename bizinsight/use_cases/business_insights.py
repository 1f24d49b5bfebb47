"""
业务洞察用例 - POST /business-insights

解析指标后并发发起两次文本生成（增长机会、战略建议），
任一生成失败都以对应的哨兵文本替代。
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence
import asyncio
import logging
import uuid

from bizinsight.domain.models import BusinessContext, BusinessInsights
from bizinsight.domain.resolver import (
    calculate_customer_growth_rate,
    resolve,
)
from bizinsight.infrastructure.errors import InvalidInsightsError
from bizinsight.infrastructure.logging import LogContext, current_request_id, log_payload_keys
from bizinsight.presentation.prompts import (
    GROWTH_OPPORTUNITIES_TASK,
    STRATEGIC_RECOMMENDATIONS_TASK,
    format_prompt,
)
from bizinsight.use_cases.base import GenerativeUseCase


logger = logging.getLogger(__name__)

GROWTH_INSIGHTS_ERROR = "Unable to generate growth opportunities at this time."
STRATEGY_INSIGHTS_ERROR = "Unable to generate strategic recommendations at this time."

CONTEXT_SOURCES = {
    "business_name": ("business_name", "businessName", "name"),
    "goals": ("goals", "businessGoals"),
    "challenges": ("challenges", "businessChallenges"),
}


def _first_text(records: Sequence[Mapping], keys: Sequence[str]) -> Optional[str]:
    for record in records:
        for key in keys:
            value = record.get(key)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value)
            value = str(value).strip()
            if value:
                return value
    return None


def extract_insights(payload: Any) -> Any:
    """取出主结构：优先使用嵌套的 insights 对象"""
    if isinstance(payload, Mapping) and "insights" in payload:
        return payload["insights"]
    return payload


class GenerateBusinessInsightsUseCase(GenerativeUseCase[BusinessInsights]):
    """
    业务洞察用例

    输入：前端 JSON（camelCase 或 snake_case）
    输出：指标 + 两段自由文本洞察
    """

    async def execute(
        self,
        payload: Any,
        request_id: Optional[str] = None,
    ) -> BusinessInsights:
        """
        生成业务洞察

        Raises:
            InvalidInsightsError: 主结构缺失或不是 JSON 对象
        """
        request_id = request_id or current_request_id() or str(uuid.uuid4())
        log_payload_keys(logger, "收到洞察请求", payload)

        insights = extract_insights(payload)
        resolution = resolve(insights)
        if not resolution.is_valid:
            raise InvalidInsightsError(
                resolution.error,
                details="Expected a JSON object containing business metrics",
            )
        metrics = resolution.metrics

        records = [r for r in (insights, payload) if isinstance(r, Mapping)]
        context = BusinessContext(
            business_name=_first_text(records, CONTEXT_SOURCES["business_name"]),
            industry=metrics.industry or None,
            goals=_first_text(records, CONTEXT_SOURCES["goals"]),
            challenges=_first_text(records, CONTEXT_SOURCES["challenges"]),
        )

        with LogContext(logger, "生成业务洞察"):
            growth, strategy = await asyncio.gather(
                self._generate_or_sentinel(
                    format_prompt(metrics, context, GROWTH_OPPORTUNITIES_TASK),
                    GROWTH_INSIGHTS_ERROR,
                ),
                self._generate_or_sentinel(
                    format_prompt(metrics, context, STRATEGIC_RECOMMENDATIONS_TASK),
                    STRATEGY_INSIGHTS_ERROR,
                ),
            )

        return BusinessInsights(
            request_id=request_id,
            metrics=metrics,
            customer_growth_rate=calculate_customer_growth_rate(
                metrics.customer_base, metrics.months
            ),
            growth_opportunities=growth,
            strategic_recommendations=strategy,
        )
