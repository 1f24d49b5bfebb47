"""
洞察路由 - 核心业务 API

- POST /business-insights: 指标解析 + 两段自由文本洞察
- POST /business-analysis: 当前/目标对比 + 两份洞察列表
"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from bizinsight.api.schemas import (
    BusinessAnalysisRequest,
    BusinessAnalysisResponse,
    BusinessInsightsResponse,
    ErrorResponse,
    analysis_to_response,
    insights_to_response,
)
from bizinsight.api.dependencies import (
    get_analysis_use_case,
    get_insights_use_case,
)
from bizinsight.infrastructure.errors import InvalidRequestError
from bizinsight.use_cases import (
    AnalyzeBusinessGoalsUseCase,
    GenerateBusinessInsightsUseCase,
)


router = APIRouter(tags=["Insights"])


async def read_json_body(request: Request) -> Any:
    """读取 JSON 请求体，无法解析时返回 400"""
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidRequestError(details=f"Request body is not valid JSON: {e}")


@router.post(
    "/business-insights",
    response_model=BusinessInsightsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "请求体无效"},
        500: {"model": ErrorResponse, "description": "服务器内部错误"},
    },
    summary="业务洞察",
    description="""
    请求体字段（camelCase 或 snake_case 均可）：
    revenue/currentRevenue, previousRevenue, totalExpenses, customerBase,
    months, industry；也可以嵌套在 insights 或 business_metrics 对象中。

    文本生成失败时对应字段返回固定的降级文本，请求仍然成功。
    """
)
async def business_insights(
    request: Request,
    use_case: GenerateBusinessInsightsUseCase = Depends(get_insights_use_case),
) -> BusinessInsightsResponse:
    """生成业务洞察"""
    payload = await read_json_body(request)
    result = await use_case.execute(
        payload,
        request_id=getattr(request.state, "request_id", None),
    )
    return insights_to_response(result)


@router.post(
    "/business-analysis",
    response_model=BusinessAnalysisResponse,
    responses={
        400: {"model": ErrorResponse, "description": "请求体无效"},
        500: {"model": ErrorResponse, "description": "服务器内部错误"},
    },
    summary="目标分析",
    description="比较当前与目标营收/利润率，返回增长机会与战略建议列表"
)
async def business_analysis(
    body: BusinessAnalysisRequest,
    request: Request,
    use_case: AnalyzeBusinessGoalsUseCase = Depends(get_analysis_use_case),
) -> BusinessAnalysisResponse:
    """执行目标分析"""
    # rawParams 原样回显调用方发送的 JSON（请求体已由 FastAPI 缓存）
    raw_params = await read_json_body(request)
    result = await use_case.execute(
        context=body.to_context(),
        current_annual_revenue=body.current_annual_revenue,
        target_annual_revenue=body.target_annual_revenue,
        current_profit_margin=body.current_profit_margin,
        target_profit_margin=body.target_profit_margin,
        raw_params=raw_params,
        request_id=getattr(request.state, "request_id", None),
    )
    return analysis_to_response(result)
