"""
API 层 - FastAPI 路由定义

包含：
- GET /: 业务指标报告
- POST /business-insights: 业务洞察
- POST /business-analysis: 目标分析
- GET /health: 健康检查
"""

from bizinsight.api.main import app, create_app
from bizinsight.api.schemas import (
    BusinessAnalysisRequest,
    BusinessAnalysisResponse,
    BusinessInsightsResponse,
    BusinessReportResponse,
    HealthResponse,
    ErrorResponse,
)
from bizinsight.api.dependencies import (
    get_analysis_use_case,
    get_insights_use_case,
    get_report_use_case,
    get_settings,
    ServiceContainer,
)

__all__ = [
    # 应用
    "app",
    "create_app",
    # 请求模型
    "BusinessAnalysisRequest",
    # 响应模型
    "BusinessAnalysisResponse",
    "BusinessInsightsResponse",
    "BusinessReportResponse",
    "HealthResponse",
    "ErrorResponse",
    # 依赖
    "get_analysis_use_case",
    "get_insights_use_case",
    "get_report_use_case",
    "get_settings",
    "ServiceContainer",
]
