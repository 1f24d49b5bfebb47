"""
提示词构建与洞察解析测试
"""

from bizinsight.domain.models import BusinessContext, GoalProjection, ResolvedMetrics
from bizinsight.presentation.prompts import (
    GROWTH_OPPORTUNITIES_TASK,
    STRATEGIC_RECOMMENDATIONS_TASK,
    build_messages,
    format_goal_prompt,
    format_prompt,
    parse_insight_list,
)


class TestParseInsightList:
    """parse_insight_list 测试"""

    def test_strips_ordinals_and_blank_lines(self):
        assert parse_insight_list("1. Do X\n\n2. Do Y\n") == ["Do X", "Do Y"]

    def test_preserves_order_and_plain_lines(self):
        raw = "Intro line\n3.Third\n  10.   Tenth  \n- bullet"
        assert parse_insight_list(raw) == ["Intro line", "Third", "Tenth", "- bullet"]

    def test_only_leading_ordinal_removed(self):
        assert parse_insight_list("1. Grow 2. segments") == ["Grow 2. segments"]

    def test_absent_text(self):
        assert parse_insight_list(None) == []
        assert parse_insight_list("") == []
        assert parse_insight_list("\n \n") == []


class TestFormatPrompt:
    """format_prompt 测试"""

    def test_includes_metrics_and_task(self, sample_metrics):
        prompt = format_prompt(sample_metrics, task=GROWTH_OPPORTUNITIES_TASK)

        assert "Current Revenue: $10,000.00" in prompt
        assert "Revenue Growth Rate: 25.00%" in prompt
        assert "Profit Margin: 40.00%" in prompt
        assert "Industry: retail" in prompt
        assert prompt.endswith(GROWTH_OPPORTUNITIES_TASK)

    def test_context_fields_included_when_present(self, sample_metrics, sample_context):
        prompt = format_prompt(sample_metrics, sample_context, STRATEGIC_RECOMMENDATIONS_TASK)

        assert "Business Name: Corner Shop" in prompt
        assert "Goals: Open a second location" in prompt
        assert "Challenges: Rising rent" in prompt
        assert prompt.count("Industry: retail") == 1

    def test_optional_context_fields_omitted(self):
        prompt = format_prompt(ResolvedMetrics(), BusinessContext(goals="Expand"))

        assert "Goals: Expand" in prompt
        assert "Business Name" not in prompt
        assert "Challenges" not in prompt
        assert "Industry" not in prompt


class TestFormatGoalPrompt:
    """format_goal_prompt 测试"""

    def test_goal_prompt(self):
        projection = GoalProjection(
            current_annual_revenue=100000.0,
            target_annual_revenue=150000.0,
            current_profit_margin=0.1,
            target_profit_margin=0.15,
            revenue_growth=50.0,
            profit_margin_improvement=5.0,
        )

        prompt = format_goal_prompt(projection, BusinessContext(business_name="Acme"))

        assert "Target Annual Revenue: $150,000.00" in prompt
        assert "Current Profit Margin: 10.00%" in prompt
        assert "Profit Margin Improvement: 5.00 percentage points" in prompt
        assert "Business Name: Acme" in prompt


def test_build_messages():
    messages = build_messages("hello")

    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[-1]["content"] == "hello"
