"""
指标解析器测试
"""

import math

import pytest

from bizinsight.domain.models import ResolvedMetrics
from bizinsight.domain.resolver import (
    FIELD_SOURCES,
    INVALID_INSIGHTS_MESSAGE,
    calculate_customer_growth_rate,
    calculate_growth_rate,
    calculate_profit_margin,
    calculate_profit_margin_improvement,
    calculate_revenue_growth,
    merge_alternate,
    resolve,
    to_amount,
    to_months,
    to_number,
)


class TestNumberCoercion:
    """数值转换测试"""

    @pytest.mark.parametrize("value,expected", [
        (10, 10.0),
        (2.5, 2.5),
        ("  42 ", 42.0),
        ("-3.5", -3.5),
    ])
    def test_to_number_valid(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", True, float("nan"), float("inf"), "inf", [1]])
    def test_to_number_unresolvable(self, value):
        assert to_number(value) is None

    def test_to_number_integer_beyond_float_range(self):
        assert to_number(10 ** 400) is None
        assert to_number(-(10 ** 400)) is None

    def test_to_amount_rejects_negative(self):
        assert to_amount("-1") is None
        assert to_amount("0") == 0.0

    def test_to_months(self):
        assert to_months("6") == 6
        assert to_months(12.0) == 12
        assert to_months("0") is None
        assert to_months("2.5") is None
        assert to_months("-3") is None


class TestDerivations:
    """派生计算测试"""

    def test_growth_rate(self):
        assert calculate_growth_rate(10000.0, 8000.0) == 25.0

    def test_growth_rate_guards_zero_previous(self):
        assert calculate_growth_rate(10000.0, 0.0) is None
        assert calculate_growth_rate(10000.0, None) is None

    def test_profit_margin(self):
        assert calculate_profit_margin(10000.0, 6000.0) == 40.0

    def test_profit_margin_guards_zero_revenue(self):
        assert calculate_profit_margin(0.0, 500.0) is None

    def test_customer_growth_rate(self):
        assert calculate_customer_growth_rate(100.0, 12) == pytest.approx(1200.0)
        assert calculate_customer_growth_rate(100.0, 0) == 0.0

    def test_revenue_growth_against_target(self):
        assert calculate_revenue_growth(100000.0, 150000.0) == 50.0
        assert calculate_revenue_growth(0.0, 150000.0) == 0.0

    def test_profit_margin_improvement_in_points(self):
        assert calculate_profit_margin_improvement(0.10, 0.15) == pytest.approx(5.0)


class TestResolve:
    """resolve 测试"""

    def test_snake_case_flat(self):
        resolution = resolve({
            "current_revenue": "10000",
            "previous_revenue": "8000",
            "total_expenses": "6000",
            "customer_base": "100",
            "industry": "retail",
        })

        assert resolution.is_valid
        metrics = resolution.metrics
        assert metrics.current_revenue == 10000.0
        assert metrics.growth_rate == 25.0
        assert metrics.profit_margin == 40.0
        assert metrics.months == 12
        assert metrics.average_revenue_per_month == 10000.0 / 12
        assert metrics.industry == "retail"

    def test_camel_case(self, sample_payload):
        metrics = resolve(sample_payload).metrics

        assert metrics.previous_revenue == 8000.0
        assert metrics.total_expenses == 6000.0
        assert metrics.customer_base == 100.0

    def test_primary_wins_over_nested(self):
        metrics = resolve({
            "current_revenue": 500,
            "business_metrics": {"current_revenue": 900, "previous_revenue": 250},
        }).metrics

        assert metrics.current_revenue == 500.0
        assert metrics.previous_revenue == 250.0
        assert metrics.growth_rate == 100.0

    def test_nested_camel_case_alternate(self):
        metrics = resolve({
            "businessMetrics": {"currentRevenue": "1200", "months": "6"},
        }).metrics

        assert metrics.current_revenue == 1200.0
        assert metrics.months == 6
        assert metrics.average_revenue_per_month == 200.0

    def test_average_always_recomputed(self):
        metrics = resolve({
            "current_revenue": 1200,
            "months": 12,
            "average_revenue_per_month": 5,
        }).metrics

        assert metrics.average_revenue_per_month == 100.0

    def test_supplied_average_used_without_revenue(self):
        metrics = resolve({"averageRevenuePerMonth": "75"}).metrics
        assert metrics.average_revenue_per_month == 75.0

    def test_supplied_growth_rate_and_margin_preferred(self):
        metrics = resolve({
            "current_revenue": 10000,
            "previous_revenue": 8000,
            "total_expenses": 6000,
            "growthRate": "12.5",
            "profit_margin": 33,
        }).metrics

        assert metrics.growth_rate == 12.5
        assert metrics.profit_margin == 33.0

    def test_zero_previous_revenue_gives_zero_growth(self):
        metrics = resolve({"current_revenue": 10000, "previous_revenue": 0}).metrics
        assert metrics.growth_rate == 0

    def test_zero_current_revenue_margin_is_finite(self):
        metrics = resolve({"current_revenue": 0, "total_expenses": 500}).metrics

        assert metrics.profit_margin == 0
        assert math.isfinite(metrics.profit_margin)

    def test_invalid_months_defaults_to_twelve(self):
        metrics = resolve({"current_revenue": 1200, "months": "zero"}).metrics
        assert metrics.months == 12
        assert metrics.average_revenue_per_month == 100.0

    def test_empty_record(self):
        resolution = resolve({})

        assert resolution.is_valid
        assert resolution.metrics == ResolvedMetrics()

    def test_huge_integer_is_unresolvable(self):
        resolution = resolve({"current_revenue": 10 ** 400, "previous_revenue": 1})

        assert resolution.is_valid
        assert resolution.metrics.current_revenue == 0.0
        assert resolution.metrics.growth_rate == 0.0
        assert resolution.metrics.previous_revenue == 1.0

    @pytest.mark.parametrize("insights", [None, "text", 42, ["a"]])
    def test_non_mapping_short_circuits(self, insights):
        resolution = resolve(insights)

        assert not resolution.is_valid
        assert resolution.error == INVALID_INSIGHTS_MESSAGE
        assert resolution.metrics == ResolvedMetrics()


class TestHelpers:
    """辅助函数测试"""

    def test_field_sources_order(self):
        fields = [name for name, _ in FIELD_SOURCES]
        assert fields.index("current_revenue") < fields.index("average_revenue_per_month")

        paths = dict(FIELD_SOURCES)["current_revenue"]
        assert paths[0] == ("current_revenue",)
        assert ("business_metrics", "current_revenue") in paths

    def test_merge_alternate(self):
        merged = merge_alternate({"current_revenue": "1"}, {"current_revenue": 2})
        assert merged == {
            "current_revenue": "1",
            "business_metrics": {"current_revenue": 2},
        }
