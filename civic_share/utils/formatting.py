"""Currency/percentage formatting and everyday-purchase comparisons."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, NamedTuple

from ..models.schema import Jurisdiction, ResidentContribution


class EverydayComparison(NamedTuple):
    item: str
    cost: float
    icon: str


# Order matters: ties in closeness go to the first listed item.
EVERYDAY_COMPARISONS: list[EverydayComparison] = [
    EverydayComparison("cup of coffee", 3.50, "☕"),
    EverydayComparison("latte", 5.50, "☕"),
    EverydayComparison("fast food meal", 10.00, "🍔"),
    EverydayComparison("movie ticket", 15.00, "🎬"),
    EverydayComparison("streaming subscription", 15.00, "📺"),
    EverydayComparison("gas tank fill-up", 50.00, "⛽"),
    EverydayComparison("grocery trip", 100.00, "🛒"),
    EverydayComparison("dinner out", 60.00, "🍽️"),
    EverydayComparison("phone bill", 80.00, "📱"),
]


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def format_currency(amount: float, show_cents: bool = True) -> str:
    """Format a dollar amount the en-US way.

    Args:
        amount: Dollar amount
        show_cents: Whether to show two decimal places

    Returns:
        Formatted string (e.g., 1234.5 -> "$1,234.50", -800 -> "-$800")
    """
    # Ties round away from zero, as en-US currency formatting does
    decimals = 2 if show_cents else 0
    rounded = Decimal(str(abs(amount))).quantize(Decimal(1).scaleb(-decimals), ROUND_HALF_UP)
    text = f"{rounded:,.{decimals}f}"
    if amount < 0 and any(ch not in "0.," for ch in text):
        return f"-${text}"
    return f"${text}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage value (already scaled to 0-100)."""
    return f"{value:.{decimals}f}%"


def round_daily(amount: float, rounding: float = 0.01) -> float:
    """Round an amount to the nearest multiple of ``rounding``.

    Halves round up (12.375 to the nearest 0.25 is 12.50).
    """
    steps = _round_half_up(amount / rounding)
    return round(steps * rounding, 10)


def get_everyday_comparison(daily_amount: float) -> str:
    """Describe a daily amount relative to the closest everyday purchase.

    Args:
        daily_amount: Amount paid per day

    Returns:
        Phrase such as "about the same as a cup of coffee" or "about 3 lattes"
    """
    closest = min(EVERYDAY_COMPARISONS, key=lambda c: abs(c.cost - daily_amount))
    ratio = daily_amount / closest.cost

    if ratio < 0.5:
        return f"less than half a {closest.item}"
    elif ratio < 0.9:
        return f"less than a {closest.item}"
    elif ratio < 1.1:
        return f"about the same as a {closest.item}"
    elif ratio < 2:
        return f"a bit more than a {closest.item}"
    return f"about {int(_round_half_up(ratio))} {closest.item}s"


def generate_comparison_text(
    contribution: ResidentContribution, jurisdiction: Jurisdiction
) -> list[str]:
    """Build the sentences that put a contribution in perspective.

    Args:
        contribution: Computed contribution
        jurisdiction: Jurisdiction the contribution goes to

    Returns:
        Daily comparison, collective framing and share-of-budget sentences
    """
    comparisons = [
        f"Your daily contribution of {format_currency(contribution.total_daily)} is "
        f"{get_everyday_comparison(contribution.total_daily)}",
        f"You're one of {jurisdiction.population:,} residents making this work together",
    ]

    decimals = 4 if contribution.percent_of_budget < 0.01 else 2
    comparisons.append(
        f"Your share is {format_percentage(contribution.percent_of_budget, decimals)} "
        "of the total budget"
    )
    return comparisons


def get_jurisdiction_size(population: int) -> Literal["small", "medium", "large"]:
    """Classify a jurisdiction by population."""
    if population < 5000:
        return "small"
    if population < 50000:
        return "medium"
    return "large"


def per_capita(amount: float, population: int) -> float:
    """Amount per resident; 0 for an empty population."""
    if population <= 0:
        return 0.0
    return amount / population
