"""Human-readable "show the math" lines for a resident's contribution."""

from collections.abc import Sequence

from pydantic import BaseModel

from ..models.schema import PropertyClass, ResidentProfile, RevenueSource, RevenueType
from ..utils.formatting import format_currency, format_percentage
from .contribution import (
    ASSUMED_VEHICLE_VALUE,
    BREAKDOWN_BUCKETS,
    DEFAULT_ASSESSMENT_RATIO,
    DEFAULT_MONTHLY_UTILITY_FEE,
    DEFAULT_PER_RESIDENT_FEE,
    DEFAULT_PERSONAL_PROPERTY_RATE,
    DEFAULT_TAX_RATE,
    TAXABLE_SPENDING_RATIO,
    source_contribution,
    utility_household_multiplier,
)


class ContributionLine(BaseModel):
    """One revenue source's share of a resident's contribution, with its formula."""

    source_id: str
    label: str
    bucket: str
    amount: float
    formula: str


def _rate(source: RevenueSource, default: float) -> float:
    return default if source.rate is None else source.rate


def _formula(resident: ResidentProfile, source: RevenueSource, amount: float) -> str:
    total = format_currency(amount)
    income = format_currency(resident.household_income, False)

    if source.type == RevenueType.PROPERTY_TAX:
        if source.property_class == PropertyClass.PERSONAL_PROPERTY:
            per_hundred = _rate(source, DEFAULT_PERSONAL_PROPERTY_RATE) * 100
            return (
                f"{resident.vehicles_registered} vehicle(s) × "
                f"{format_currency(ASSUMED_VEHICLE_VALUE, False)} × "
                f"${per_hundred:.2f}/$100 = {total}"
            )
        ratio = DEFAULT_ASSESSMENT_RATIO if source.base is None else source.base
        per_hundred = _rate(source, DEFAULT_TAX_RATE) * 100
        return (
            f"{format_currency(resident.home_value or 0, False)} × "
            f"{format_percentage(ratio * 100, 0)} assessed × "
            f"${per_hundred:.4f}/$100 = {total}"
        )

    if source.type in (RevenueType.INCOME_TAX, RevenueType.WAGE_TAX):
        rate = format_percentage(_rate(source, DEFAULT_TAX_RATE) * 100, 2)
        return f"{income} × {rate} = {total}"

    if source.type == RevenueType.SALES_TAX:
        rate = format_percentage(_rate(source, DEFAULT_TAX_RATE) * 100, 2)
        spending = format_percentage(TAXABLE_SPENDING_RATIO * 100, 0)
        return f"{income} × {spending} taxable spending × {rate} = {total}"

    if source.type == RevenueType.UTILITY_FEES:
        fee = format_currency(_rate(source, DEFAULT_MONTHLY_UTILITY_FEE))
        factor = utility_household_multiplier(resident.household_size)
        return f"{fee}/month × {factor:.2f} household factor × 12 = {total}"

    fee = format_currency(_rate(source, DEFAULT_PER_RESIDENT_FEE))
    return f"{fee} per-resident estimate"


def explain_contribution(
    resident: ResidentProfile, revenue_sources: Sequence[RevenueSource]
) -> list[ContributionLine]:
    """Explain how each revenue source adds to a resident's contribution.

    Sources the resident pays nothing toward are omitted. Real estate and
    personal property taxes appear as separate lines.

    Args:
        resident: Household profile
        revenue_sources: Jurisdiction's revenue sources

    Returns:
        Lines in source order
    """
    lines = []
    for source in revenue_sources:
        bucket = BREAKDOWN_BUCKETS[source.type]
        if bucket is None:
            continue
        amount = source_contribution(resident, source)
        if amount == 0:
            continue
        lines.append(
            ContributionLine(
                source_id=source.id,
                label=source.name,
                bucket=bucket,
                amount=amount,
                formula=_formula(resident, source, amount),
            )
        )
    return lines
