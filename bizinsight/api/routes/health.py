"""
健康检查路由 - 系统状态监控 API
"""

from fastapi import APIRouter, Depends
from datetime import datetime

from bizinsight.api.schemas import HealthResponse
from bizinsight.api.dependencies import (
    ServiceContainer,
    Settings,
    get_service_container,
    get_settings,
)


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="健康检查",
    description="返回服务状态及外部依赖的配置情况"
)
async def health_check(
    settings: Settings = Depends(get_settings),
    container: ServiceContainer = Depends(get_service_container),
) -> HealthResponse:
    """健康检查"""
    components = {
        "assessment_api": "configured" if settings.ASSESSMENT_API_URL else "not_configured",
        "text_generation": (
            "enabled" if container.text_generator.available else "disabled"
        ),
    }

    # 评估 API 缺失时 GET / 无法工作
    overall_status = "healthy" if settings.ASSESSMENT_API_URL else "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(),
        version=settings.APP_VERSION,
        components=components,
    )
