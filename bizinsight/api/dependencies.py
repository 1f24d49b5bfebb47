"""
依赖注入 - FastAPI 依赖配置

集中管理所有服务的创建和注入，
确保单一实例和正确的生命周期管理。
"""

from functools import lru_cache
from typing import Optional
import logging
import os

from dotenv import load_dotenv

from bizinsight.adapters.assessment_adapter import AssessmentAPIAdapter
from bizinsight.adapters.llm_adapter import LiteLLMAdapter, NullTextGenerator
from bizinsight.ports.interfaces import AssessmentPort, TextGenerationPort
from bizinsight.use_cases import (
    AnalyzeBusinessGoalsUseCase,
    GenerateBusinessInsightsUseCase,
    GetBusinessReportUseCase,
)


logger = logging.getLogger(__name__)


# 配置类
class Settings:
    """应用配置（从环境变量读取）"""

    def __init__(self):
        # 基本配置
        self.APP_NAME: str = os.getenv('APP_NAME', 'BizInsight API')
        self.APP_VERSION: str = "1.0.0"
        self.DEBUG: bool = os.getenv('DEBUG', 'false').lower() == 'true'

        # 服务配置
        self.HOST: str = os.getenv('HOST', '0.0.0.0')
        self.PORT: int = int(os.getenv('PORT', '8000'))

        # CORS 配置
        self.CORS_ORIGIN: str = os.getenv('CORS_ORIGIN', '*')

        # 日志配置
        self.LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'DEBUG' if self.DEBUG else 'INFO')
        self.LOG_JSON: bool = os.getenv('LOG_JSON', 'false').lower() == 'true'

        # LLM 配置
        self.LLM_PROVIDER: str = os.getenv('LLM_PROVIDER', 'openai')
        self.LLM_MODEL: str = os.getenv('LLM_MODEL', 'gpt-4o-mini')
        self.LLM_API_KEY: Optional[str] = os.getenv('LLM_API_KEY') or os.getenv('OPENAI_API_KEY')
        self.LLM_API_BASE: Optional[str] = os.getenv('LLM_API_BASE') or None
        self.LLM_MAX_TOKENS: int = int(os.getenv('LLM_MAX_TOKENS', '512'))
        self.LLM_TEMPERATURE: float = float(os.getenv('LLM_TEMPERATURE', '0.7'))

        # 业务评估 API
        self.ASSESSMENT_API_URL: str = os.getenv('ASSESSMENT_API_URL', '')
        self.ASSESSMENT_API_KEY: Optional[str] = os.getenv('ASSESSMENT_API_KEY') or None

        # 超时配置（秒）
        self.REQUEST_TIMEOUT: int = int(os.getenv('REQUEST_TIMEOUT', '30'))


@lru_cache()
def get_settings() -> Settings:
    """获取应用配置"""
    # 读取 .env 中的环境变量（已存在的环境变量优先）
    load_dotenv()
    return Settings()


class ServiceContainer:
    """
    服务容器 - 管理所有服务实例

    适配器在启动时创建一次；文本生成器的具体实现
    （真实 LLM 或空实现）也在此时确定，请求期间不再探测。
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self._assessment: AssessmentPort = AssessmentAPIAdapter(
            base_url=self.settings.ASSESSMENT_API_URL,
            api_key=self.settings.ASSESSMENT_API_KEY,
            timeout=self.settings.REQUEST_TIMEOUT,
        )
        self._text_generator: TextGenerationPort = self._init_text_generator()

        self._report_use_case = GetBusinessReportUseCase(self._assessment)
        self._insights_use_case = GenerateBusinessInsightsUseCase(
            self._text_generator,
            max_tokens=self.settings.LLM_MAX_TOKENS,
            temperature=self.settings.LLM_TEMPERATURE,
        )
        self._analysis_use_case = AnalyzeBusinessGoalsUseCase(
            self._text_generator,
            max_tokens=self.settings.LLM_MAX_TOKENS,
            temperature=self.settings.LLM_TEMPERATURE,
        )

    def _init_text_generator(self) -> TextGenerationPort:
        """初始化文本生成器：未配置 API 密钥时使用空实现"""
        if not self.settings.LLM_API_KEY:
            logger.info("未配置 LLM API 密钥，使用 NullTextGenerator")
            return NullTextGenerator()

        logger.info(f"使用 LLM: {self.settings.LLM_PROVIDER}/{self.settings.LLM_MODEL}")
        return LiteLLMAdapter(
            provider=self.settings.LLM_PROVIDER,
            model=self.settings.LLM_MODEL,
            api_key=self.settings.LLM_API_KEY,
            api_base=self.settings.LLM_API_BASE,
            timeout=self.settings.REQUEST_TIMEOUT,
        )

    @property
    def text_generator(self) -> TextGenerationPort:
        return self._text_generator

    @property
    def report_use_case(self) -> GetBusinessReportUseCase:
        return self._report_use_case

    @property
    def insights_use_case(self) -> GenerateBusinessInsightsUseCase:
        return self._insights_use_case

    @property
    def analysis_use_case(self) -> AnalyzeBusinessGoalsUseCase:
        return self._analysis_use_case


@lru_cache()
def get_service_container() -> ServiceContainer:
    """
    获取服务容器单例

    使用 lru_cache 确保只创建一次
    """
    return ServiceContainer()


def get_report_use_case() -> GetBusinessReportUseCase:
    """FastAPI 依赖：获取业务报告用例"""
    return get_service_container().report_use_case


def get_insights_use_case() -> GenerateBusinessInsightsUseCase:
    """FastAPI 依赖：获取业务洞察用例"""
    return get_service_container().insights_use_case


def get_analysis_use_case() -> AnalyzeBusinessGoalsUseCase:
    """FastAPI 依赖：获取目标分析用例"""
    return get_service_container().analysis_use_case
