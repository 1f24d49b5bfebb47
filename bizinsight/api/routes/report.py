"""
报告路由 - GET /

基于查询参数和第三方评估数据生成业务指标报告。
"""

from fastapi import APIRouter, Depends, Request

from bizinsight.api.schemas import (
    BusinessReportResponse,
    ErrorResponse,
    report_to_response,
)
from bizinsight.api.dependencies import get_report_use_case
from bizinsight.use_cases import GetBusinessReportUseCase


router = APIRouter(tags=["Report"])


@router.get(
    "/",
    response_model=BusinessReportResponse,
    responses={
        400: {"model": ErrorResponse, "description": "参数缺失或无效"},
        500: {"model": ErrorResponse, "description": "评估 API 失败或内部错误"},
    },
    summary="业务指标报告",
    description="""
    查询参数：current_revenue, previous_revenue, total_expenses,
    customer_base, months（可选，默认 12）, industry。

    参数校验通过后调用第三方评估 API，并将其返回数据作为备用来源解析指标。
    """
)
def get_business_report(
    request: Request,
    use_case: GetBusinessReportUseCase = Depends(get_report_use_case),
) -> BusinessReportResponse:
    """生成业务报告（同步路由，在线程池中执行阻塞的 HTTP 调用）"""
    report = use_case.execute(
        dict(request.query_params),
        request_id=getattr(request.state, "request_id", None),
    )
    return report_to_response(report)
