"""
路由包初始化
"""

from bizinsight.api.routes.health import router as health_router
from bizinsight.api.routes.insights import router as insights_router
from bizinsight.api.routes.report import router as report_router

__all__ = [
    "health_router",
    "insights_router",
    "report_router",
]
