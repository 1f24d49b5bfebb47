"""
测试配置 - pytest 配置和公共 fixtures
"""

import pytest
from unittest.mock import Mock, AsyncMock

from bizinsight.domain.models import BusinessContext, ResolvedMetrics


# ==================== Fixtures ====================

@pytest.fixture
def sample_payload():
    """前端提交的业务指标（camelCase）"""
    return {
        "currentRevenue": 10000,
        "previousRevenue": 8000,
        "totalExpenses": 6000,
        "customerBase": 100,
        "industry": "retail",
    }


@pytest.fixture
def sample_query_params():
    """GET / 的查询参数"""
    return {
        "current_revenue": "10000",
        "previous_revenue": "8000",
        "total_expenses": "6000",
        "customer_base": "100",
        "industry": "retail",
    }


@pytest.fixture
def sample_metrics():
    """已解析的业务指标"""
    return ResolvedMetrics(
        current_revenue=10000.0,
        previous_revenue=8000.0,
        total_expenses=6000.0,
        customer_base=100.0,
        months=12,
        average_revenue_per_month=10000.0 / 12,
        growth_rate=25.0,
        profit_margin=40.0,
        industry="retail",
    )


@pytest.fixture
def sample_context():
    """业务上下文"""
    return BusinessContext(
        business_name="Corner Shop",
        industry="retail",
        goals="Open a second location",
        challenges="Rising rent",
    )


@pytest.fixture
def sample_assessment():
    """评估 API 返回数据"""
    return {
        "score": 72,
        "rating": "stable",
        "customer_base": 120,
        "average_revenue_per_month": 999,
    }


@pytest.fixture
def mock_assessment_port(sample_assessment):
    """模拟评估端口"""
    port = Mock()
    port.fetch_assessment.return_value = sample_assessment
    return port


@pytest.fixture
def mock_text_generator():
    """模拟文本生成端口"""
    port = Mock()
    port.generate = AsyncMock(return_value="1. Expand online sales\n\n2. Launch a loyalty program\n")
    return port


@pytest.fixture
def failing_text_generator():
    """总是失败的文本生成端口"""
    port = Mock()
    port.generate = AsyncMock(side_effect=RuntimeError("model offline"))
    return port
