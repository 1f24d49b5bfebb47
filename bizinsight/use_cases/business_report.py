"""
业务报告用例 - GET /

校验查询参数 -> 调用评估 API -> 解析指标。
评估 API 失败会终止整个请求。
"""

from typing import Mapping, Optional
import logging
import uuid

from bizinsight.domain.models import BusinessReport
from bizinsight.domain.resolver import merge_alternate, resolve
from bizinsight.domain.validation import (
    collect_report_params,
    validate_report_params,
)
from bizinsight.infrastructure.errors import (
    InvalidInsightsError,
    ParameterValidationError,
    UpstreamServiceError,
)
from bizinsight.infrastructure.logging import LogContext, current_request_id
from bizinsight.ports.interfaces import AssessmentPort, DataUnavailableError
from bizinsight.use_cases.base import UseCase


logger = logging.getLogger(__name__)


class GetBusinessReportUseCase(UseCase[BusinessReport]):
    """
    业务报告用例

    输入：查询参数
    输出：规范化指标 + 评估 API 原始数据
    """

    def __init__(self, assessment_port: AssessmentPort):
        self.assessment = assessment_port

    def execute(
        self,
        params: Mapping[str, str],
        request_id: Optional[str] = None,
    ) -> BusinessReport:
        """
        生成业务报告

        Raises:
            ParameterValidationError: 参数缺失或无效
            UpstreamServiceError: 评估 API 失败
        """
        request_id = request_id or current_request_id() or str(uuid.uuid4())

        missing, invalid = validate_report_params(params)
        if missing or invalid:
            logger.info("参数校验失败 missing=%s invalid=%s", missing, invalid)
            raise ParameterValidationError(missing=missing, invalid=invalid)

        query = collect_report_params(params)
        query.setdefault("months", "12")

        with LogContext(logger, "业务评估查询"):
            try:
                assessment = self.assessment.fetch_assessment(query)
            except DataUnavailableError as e:
                raise UpstreamServiceError(e.source, e.message) from e

        resolution = resolve(merge_alternate(query, assessment))
        if not resolution.is_valid:
            raise InvalidInsightsError(resolution.error)

        return BusinessReport(
            request_id=request_id,
            metrics=resolution.metrics,
            assessment=assessment,
        )
