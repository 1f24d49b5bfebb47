"""
适配器测试 - 外部调用全部以 Mock 替代
"""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest
import requests

from bizinsight.adapters.assessment_adapter import AssessmentAPIAdapter
from bizinsight.adapters.llm_adapter import LiteLLMAdapter, NullTextGenerator
from bizinsight.ports.interfaces import DataUnavailableError, GenerationError


def _response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload if payload is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


GET_PATH = "bizinsight.adapters.assessment_adapter.requests.get"


class TestAssessmentAPIAdapter:
    """AssessmentAPIAdapter 测试"""

    @patch(GET_PATH)
    def test_fetch_success(self, mock_get):
        mock_get.return_value = _response(payload={"score": 80})
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1", api_key="k")

        data = adapter.fetch_assessment({"industry": "retail"})

        assert data == {"score": 80}
        args, kwargs = mock_get.call_args
        assert args[0] == "https://assess.example.com/v1"
        assert kwargs["params"] == {"industry": "retail"}
        assert kwargs["headers"]["Authorization"] == "Bearer k"
        assert kwargs["timeout"] == 20

    @patch(GET_PATH)
    def test_each_call_issues_its_own_request(self, mock_get):
        mock_get.return_value = _response(payload={})
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1")

        adapter.fetch_assessment({})
        adapter.fetch_assessment({})

        assert mock_get.call_count == 2
        assert not hasattr(adapter, "session")

    @patch(GET_PATH)
    def test_http_error_includes_upstream_text(self, mock_get):
        mock_get.return_value = _response(status_code=502, text="bad gateway")
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1")

        with pytest.raises(DataUnavailableError) as exc_info:
            adapter.fetch_assessment({})

        assert "502" in exc_info.value.message
        assert "bad gateway" in exc_info.value.message

    @patch(GET_PATH)
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1")

        with pytest.raises(DataUnavailableError) as exc_info:
            adapter.fetch_assessment({})

        assert "connection refused" in exc_info.value.message

    @patch(GET_PATH)
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1")

        with pytest.raises(DataUnavailableError):
            adapter.fetch_assessment({})

    @patch(GET_PATH)
    def test_non_object_payload(self, mock_get):
        mock_get.return_value = _response(payload=[1, 2, 3])
        adapter = AssessmentAPIAdapter("https://assess.example.com/v1")

        with pytest.raises(DataUnavailableError):
            adapter.fetch_assessment({})

    @patch(GET_PATH)
    def test_unconfigured_url(self, mock_get):
        adapter = AssessmentAPIAdapter("")

        with pytest.raises(DataUnavailableError):
            adapter.fetch_assessment({})

        mock_get.assert_not_called()


class TestLiteLLMAdapter:
    """LiteLLMAdapter 测试"""

    def _completion(self, content):
        response = Mock()
        response.choices = [Mock(message=Mock(content=content))]
        return response

    def test_generate(self):
        adapter = LiteLLMAdapter(provider="openai", model="gpt-4o-mini", api_key="k")
        mocked = AsyncMock(return_value=self._completion("1. Grow"))

        with patch("bizinsight.adapters.llm_adapter.acompletion", mocked):
            text = asyncio.run(adapter.generate(
                [{"role": "user", "content": "hi"}],
                max_tokens=100,
                temperature=0.2,
            ))

        assert text == "1. Grow"
        kwargs = mocked.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-4o-mini"
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0.2

    def test_optional_parameters_omitted(self):
        adapter = LiteLLMAdapter(provider="", model="gpt-4o-mini")
        mocked = AsyncMock(return_value=self._completion(None))

        with patch("bizinsight.adapters.llm_adapter.acompletion", mocked):
            text = asyncio.run(adapter.generate([{"role": "user", "content": "hi"}]))

        assert text == ""
        kwargs = mocked.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert "max_tokens" not in kwargs
        assert "temperature" not in kwargs

    def test_failure_raises_generation_error(self):
        adapter = LiteLLMAdapter(api_key="k")
        mocked = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        with patch("bizinsight.adapters.llm_adapter.acompletion", mocked):
            with pytest.raises(GenerationError) as exc_info:
                asyncio.run(adapter.generate([{"role": "user", "content": "hi"}]))

        assert "quota exceeded" in exc_info.value.message


def test_null_text_generator():
    generator = NullTextGenerator()

    assert asyncio.run(generator.generate([])) == "No AI insights available"
    assert generator.available is False
    assert LiteLLMAdapter(api_key="k").available is True
