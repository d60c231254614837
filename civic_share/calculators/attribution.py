"""Revenue attribution: how much of a jurisdiction's revenue each payer group funds."""

from collections.abc import Sequence

from ..models.schema import RevenueAttribution, RevenueSource


def _percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def attribute_revenue(
    revenue_sources: Sequence[RevenueSource], your_contribution: float = 0.0
) -> RevenueAttribution:
    """Split total revenue between residents, businesses, governments and visitors.

    Government sources count entirely toward government. For every other
    source the residential share goes to residents; the remainder goes to
    visitors for visitor-paid sources and to commercial payers otherwise.

    Args:
        revenue_sources: Jurisdiction's revenue sources
        your_contribution: A resident's annual contribution, compared against
            the residential total

    Returns:
        Totals and percentages by payer group
    """
    total_revenue = sum(source.amount for source in revenue_sources)

    residential = commercial = government = visitors = 0.0
    for source in revenue_sources:
        if source.payer == "government":
            government += source.amount
            continue

        residential_amount = source.amount * (source.effective_residential_share / 100)
        residential += residential_amount
        if source.payer == "visitors":
            visitors += source.amount - residential_amount
        else:
            commercial += source.amount - residential_amount

    return RevenueAttribution(
        total_revenue=total_revenue,
        residential_total=residential,
        commercial_total=commercial,
        government_total=government,
        visitor_total=visitors,
        residential_percent=_percent(residential, total_revenue),
        commercial_percent=_percent(commercial, total_revenue),
        government_percent=_percent(government, total_revenue),
        visitor_percent=_percent(visitors, total_revenue),
        your_percent_of_residential=_percent(your_contribution, residential),
    )
