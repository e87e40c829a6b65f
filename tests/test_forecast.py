"""
Tests for the revenue forecast
"""

import pytest

from saleshub.analysis.errors import InvalidArgument
from saleshub.analysis.forecast import (
    CONVERSION_RATES,
    PipelineContext,
    generate_forecast,
)


class TestGenerateForecast:

    def test_scaled_from_lead_score(self):
        result = generate_forecast(100)
        assert result.monthly_forecast.this_month == 100000
        assert result.monthly_forecast.next_month == 120000
        assert result.monthly_forecast.third_month == 130000
        assert result.pipeline_metrics.total_opportunities == 25
        assert result.pipeline_metrics.weighted_pipeline == 250000
        assert result.pipeline_metrics.average_deal_size == 10000

    def test_half_score(self):
        result = generate_forecast(50)
        assert result.monthly_forecast.this_month == 50000
        assert result.monthly_forecast.next_month == 60000
        assert result.pipeline_metrics.weighted_pipeline == 125000
        assert result.pipeline_metrics.average_deal_size == 5000

    def test_empty_context_uses_baseline(self):
        result = generate_forecast(70, {})
        assert result.monthly_forecast.this_month == 50000
        assert result.monthly_forecast.next_month == 60000
        assert result.monthly_forecast.third_month == 65000
        assert result.pipeline_metrics.average_deal_size == 10000

    def test_zero_opportunities_does_not_divide_by_zero(self):
        context = PipelineContext(expected_revenue=1000, total_opportunities=0, weighted_value=500)
        result = generate_forecast(10, context)
        assert result.pipeline_metrics.total_opportunities == 25
        assert result.pipeline_metrics.average_deal_size == 20

    def test_explicit_context(self):
        result = generate_forecast(80, {
            "expected_revenue": 10000,
            "total_opportunities": 4,
            "weighted_value": 30000
        })
        assert result.monthly_forecast.next_month == 12000
        assert result.monthly_forecast.third_month == 13000
        assert result.pipeline_metrics.average_deal_size == 7500

    def test_static_fields(self):
        data = generate_forecast(50).to_dict()
        assert data["conversion_rates"] == dict(CONVERSION_RATES)
        assert data["pipeline_metrics"]["sales_cycle_length"] == "45-60 days"
        assert len(data["performance_indicators"]) == 4

    def test_idempotent(self):
        assert generate_forecast(42).to_dict() == generate_forecast(42).to_dict()

    @pytest.mark.parametrize("bad_score", [-1, 101, "50", None, True])
    def test_invalid_lead_score(self, bad_score):
        with pytest.raises(InvalidArgument):
            generate_forecast(bad_score)

    def test_invalid_context(self):
        with pytest.raises(InvalidArgument):
            generate_forecast(50, ["not", "a", "mapping"])
        with pytest.raises(InvalidArgument):
            generate_forecast(50, {"expected_revenue": "lots"})
