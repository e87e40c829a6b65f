"""
Tests for argument checks and rounding
"""

import pytest

from saleshub.analysis.errors import InvalidArgument, optional_number, optional_text, round_half_up


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (2.4999, 2),
        (-2.5, -2),
        (-2.6, -3),
        (-0.5, 0),
        (1149.9999999999998, 1150),
    ])
    def test_halves_round_towards_positive_infinity(self, value, expected):
        assert round_half_up(value) == expected

    def test_returns_int(self):
        assert isinstance(round_half_up(7.0), int)


class TestArgumentChecks:

    def test_optional_text(self):
        assert optional_text(None, "industry") is None
        assert optional_text("Retail", "industry") == "Retail"
        with pytest.raises(InvalidArgument, match="industry must be a string"):
            optional_text(3, "industry")

    def test_optional_number_rejects_bool(self):
        assert optional_number(1.5, "weighted_value") == 1.5
        with pytest.raises(InvalidArgument):
            optional_number(True, "weighted_value")
