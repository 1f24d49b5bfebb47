"""
查询参数校验测试
"""

from bizinsight.domain.validation import (
    collect_report_params,
    validate_report_params,
)


class TestValidateReportParams:
    """validate_report_params 测试"""

    def test_all_valid(self, sample_query_params):
        assert validate_report_params(sample_query_params) == ([], [])

    def test_only_industry_missing(self, sample_query_params):
        del sample_query_params["industry"]

        missing, invalid = validate_report_params(sample_query_params)

        assert missing == ["industry"]
        assert invalid == []

    def test_blank_counts_as_missing(self, sample_query_params):
        sample_query_params["customer_base"] = "  "

        missing, invalid = validate_report_params(sample_query_params)

        assert missing == ["customer_base"]
        assert "customer_base" not in invalid

    def test_zero_previous_revenue_is_invalid(self, sample_query_params):
        sample_query_params["previous_revenue"] = "0"

        missing, invalid = validate_report_params(sample_query_params)

        assert missing == []
        assert invalid == ["previous_revenue"]

    def test_missing_and_invalid_are_disjoint(self, sample_query_params):
        del sample_query_params["industry"]
        sample_query_params["total_expenses"] = "lots"
        sample_query_params["previous_revenue"] = "0"

        missing, invalid = validate_report_params(sample_query_params)

        assert missing == ["industry"]
        assert invalid == ["previous_revenue", "total_expenses"]
        assert not set(missing) & set(invalid)

    def test_negative_amount_is_invalid(self, sample_query_params):
        sample_query_params["current_revenue"] = "-5"

        _, invalid = validate_report_params(sample_query_params)

        assert invalid == ["current_revenue"]

    def test_months_optional_but_checked(self, sample_query_params):
        assert validate_report_params(sample_query_params)[1] == []

        sample_query_params["months"] = "0"
        assert validate_report_params(sample_query_params)[1] == ["months"]

        sample_query_params["months"] = "6"
        assert validate_report_params(sample_query_params)[1] == []

    def test_empty_params(self):
        missing, invalid = validate_report_params({})

        assert missing == [
            "current_revenue",
            "previous_revenue",
            "total_expenses",
            "customer_base",
            "industry",
        ]
        assert invalid == []


class TestCollectReportParams:
    """collect_report_params 测试"""

    def test_strips_and_drops_unknown(self, sample_query_params):
        sample_query_params["industry"] = " retail "
        sample_query_params["debug"] = "1"

        collected = collect_report_params(sample_query_params)

        assert collected["industry"] == "retail"
        assert "debug" not in collected
        assert "months" not in collected
