"""Tests for formatting and everyday comparisons."""

import pytest

from civic_share.calculators.contribution import compute_contribution
from civic_share.utils.formatting import (
    format_currency,
    format_percentage,
    generate_comparison_text,
    get_everyday_comparison,
    get_jurisdiction_size,
    per_capita,
    round_daily,
)
from tests.factories import make_category, make_jurisdiction, make_resident, make_source


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "amount,show_cents,expected",
        [
            (1234.5, True, "$1,234.50"),
            (0, True, "$0.00"),
            (800, False, "$800"),
            (2850000, False, "$2,850,000"),
            (799.6, False, "$800"),
            (-42.1, True, "-$42.10"),
            (-0.001, True, "$0.00"),
            (0.125, True, "$0.13"),
            (500.5, False, "$501"),
            (-2.5, False, "-$3"),
        ],
    )
    def test_format(self, amount, show_cents, expected):
        assert format_currency(amount, show_cents) == expected

    def test_cents_by_default(self):
        assert format_currency(7.26) == "$7.26"


class TestFormatPercentage:
    def test_default_one_decimal(self):
        assert format_percentage(12.345) == "12.3%"

    def test_custom_decimals(self):
        assert format_percentage(0.00224, 4) == "0.0022%"


class TestRoundDaily:
    def test_rounds_down_to_quarter(self):
        assert round_daily(12.34, 0.25) == 12.25

    def test_rounds_up_to_quarter(self):
        assert round_daily(12.38, 0.25) == 12.50

    def test_half_rounds_up(self):
        assert round_daily(12.375, 0.25) == 12.50

    def test_tenths(self):
        assert round_daily(7.26, 0.1) == pytest.approx(7.3)

    def test_default_cents(self):
        assert round_daily(1.234) == pytest.approx(1.23)


class TestEverydayComparison:
    """Tests for get_everyday_comparison."""

    def test_same_as_coffee(self):
        assert get_everyday_comparison(3.50) == "about the same as a cup of coffee"

    def test_less_than_half(self):
        assert "less than half" in get_everyday_comparison(1.50)

    def test_latte_is_closer_than_coffee(self):
        assert get_everyday_comparison(7.50) == "a bit more than a latte"

    def test_less_than(self):
        # Closest is the cup of coffee, ratio ~0.86
        assert get_everyday_comparison(3.00) == "less than a cup of coffee"

    def test_tie_goes_to_first_listed(self):
        """Movie ticket and streaming subscription both cost $15."""
        assert get_everyday_comparison(15.00) == "about the same as a movie ticket"

    def test_multiples(self):
        # Closest to $300 is the grocery trip, ratio 3
        assert get_everyday_comparison(300) == "about 3 grocery trips"

    @pytest.mark.parametrize("amount", [0, -5])
    def test_zero_and_negative_still_answer(self, amount):
        assert get_everyday_comparison(amount) == "less than half a cup of coffee"


class TestComparisonText:
    def test_sentences(self):
        jurisdiction = make_jurisdiction(total_budget=265000, population=3200)
        contribution = compute_contribution(
            make_resident(),
            jurisdiction,
            [make_source("property_tax", rate=0.01), make_source("income_tax", rate=0.01)],
            [make_category("general", 1000)],
        )
        sentences = generate_comparison_text(contribution, jurisdiction)

        assert sentences[0] == (
            "Your daily contribution of $7.26 is a bit more than a latte"
        )
        assert sentences[1] == "You're one of 3,200 residents making this work together"
        assert sentences[2] == "Your share is 1.00% of the total budget"

    def test_tiny_share_uses_four_decimals(self):
        jurisdiction = make_jurisdiction(total_budget=100_000_000)
        contribution = compute_contribution(
            make_resident(),
            jurisdiction,
            [make_source("permits_fees", rate=100)],
            [make_category("general", 1000)],
        )
        sentences = generate_comparison_text(contribution, jurisdiction)
        assert sentences[2] == "Your share is 0.0001% of the total budget"


class TestJurisdictionHelpers:
    @pytest.mark.parametrize(
        "population,size",
        [(3200, "small"), (5000, "medium"), (28500, "medium"), (50000, "large")],
    )
    def test_size(self, population, size):
        assert get_jurisdiction_size(population) == size

    def test_per_capita(self):
        assert per_capita(2850000, 3200) == pytest.approx(890.625)
        assert per_capita(100, 0) == 0
