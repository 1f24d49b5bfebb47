"""
BizInsight - 业务指标分析服务

基于 Clean/Hex 六边形架构构建，提供：
- 业务指标规范化与派生比率计算
- 可选的 AI 增长机会 / 战略建议生成
- 当前与目标营收、利润率对比分析

架构层次：
- domain: 核心领域模型与指标解析器
- ports: 端口接口定义
- adapters: 外部服务适配器
- use_cases: 业务用例
- presentation: 提示词构建与洞察解析
- infrastructure: 基础设施（日志、错误、中间件）
- api: FastAPI 路由

快速开始：
```python
from bizinsight.domain import resolve

resolution = resolve({"currentRevenue": 10000, "previousRevenue": 8000})
print(resolution.metrics.growth_rate)  # 25.0
```
"""

__version__ = "1.0.0"
__author__ = "BizInsight Team"

from bizinsight.domain.models import (
    ResolvedMetrics,
    MetricResolution,
    BusinessContext,
    GoalProjection,
)
from bizinsight.domain.resolver import resolve
from bizinsight.presentation.prompts import (
    format_prompt,
    parse_insight_list,
)

__all__ = [
    "__version__",
    "__author__",
    "ResolvedMetrics",
    "MetricResolution",
    "BusinessContext",
    "GoalProjection",
    "resolve",
    "format_prompt",
    "parse_insight_list",
]
