"""
用例层 - 业务逻辑的核心实现

每个用例对应一个 HTTP 端点，只依赖 ports 接口。

包含：
- GetBusinessReportUseCase: 参数校验 + 评估 API + 指标解析
- GenerateBusinessInsightsUseCase: 指标 + 两段自由文本洞察
- AnalyzeBusinessGoalsUseCase: 当前/目标对比 + 两份洞察列表
"""

from bizinsight.use_cases.business_report import GetBusinessReportUseCase
from bizinsight.use_cases.business_insights import GenerateBusinessInsightsUseCase
from bizinsight.use_cases.business_analysis import AnalyzeBusinessGoalsUseCase

__all__ = [
    "GetBusinessReportUseCase",
    "GenerateBusinessInsightsUseCase",
    "AnalyzeBusinessGoalsUseCase",
]
