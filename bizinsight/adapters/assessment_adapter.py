"""
业务评估适配器 - 实现 AssessmentPort

调用第三方业务评估 REST API，返回的 JSON 对象
作为指标解析的备用数据源。
"""

from typing import Any, Dict, Optional

import requests

from bizinsight.ports.interfaces import (
    AssessmentPort,
    DataUnavailableError,
)


class AssessmentAPIAdapter(AssessmentPort):
    """
    业务评估 API 适配器

    每次调用独立发起请求（不共享会话），失败即抛出 DataUnavailableError。
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: int = 20,
    ):
        """
        初始化适配器

        Args:
            base_url: 评估 API 地址
            api_key: API 密钥（可选，以 Bearer 方式发送）
            timeout: 请求超时时间（秒）
        """
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self.source = "Business Assessment API"

    def fetch_assessment(self, params: Dict[str, str]) -> Dict[str, Any]:
        """获取业务评估数据"""
        if not self.base_url:
            raise DataUnavailableError(
                "评估 API 地址未配置",
                source=self.source,
            )

        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout:
            raise DataUnavailableError(
                "评估 API 请求超时",
                source=self.source,
            )
        except requests.exceptions.HTTPError as e:
            raise DataUnavailableError(
                f"评估 API 返回错误状态: {e.response.status_code} {e.response.text}",
                source=self.source,
            )
        except requests.exceptions.RequestException as e:
            raise DataUnavailableError(
                f"评估 API 请求失败: {str(e)}",
                source=self.source,
            )
        except ValueError as e:
            raise DataUnavailableError(
                f"评估 API 响应解析失败: {str(e)}",
                source=self.source,
            )

        if not isinstance(data, dict):
            raise DataUnavailableError(
                "评估 API 响应不是 JSON 对象",
                source=self.source,
            )
        return data
