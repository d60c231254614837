"""Resident contribution calculator.

Maps a household profile and a jurisdiction's revenue structure to an annual
dollar breakdown by revenue type, then splits the total across budget
categories in proportion to their amounts. Everything here is pure: inputs are
never mutated and each call builds a fresh result.
"""

from collections.abc import Sequence

import structlog

from ..models.schema import (
    BudgetCategory,
    ContributionBreakdown,
    Jurisdiction,
    PropertyClass,
    ResidentContribution,
    ResidentProfile,
    RevenueSource,
    RevenueType,
    ServiceAllocation,
)

logger = structlog.get_logger()

DEFAULT_TAX_RATE = 0.01
DEFAULT_ASSESSMENT_RATIO = 1.0
DEFAULT_PERSONAL_PROPERTY_RATE = 0.04
DEFAULT_MONTHLY_UTILITY_FEE = 50.0
DEFAULT_PER_RESIDENT_FEE = 100.0

# Share of household income assumed to go to taxable purchases
TAXABLE_SPENDING_RATIO = 0.30
ASSUMED_VEHICLE_VALUE = 25000.0

# Breakdown field each revenue type accumulates into
BREAKDOWN_BUCKETS: dict[RevenueType, str | None] = {
    RevenueType.PROPERTY_TAX: "property_tax",
    RevenueType.INCOME_TAX: "income_tax",
    RevenueType.WAGE_TAX: "wage_tax",
    RevenueType.SALES_TAX: "sales_tax",
    RevenueType.UTILITY_FEES: "utility_fees",
    RevenueType.PERMITS_FEES: "other_fees",
    RevenueType.OTHER: "other_fees",
    RevenueType.GRANTS: None,
}


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


def utility_household_multiplier(household_size: float) -> float:
    """Usage multiplier for utility fees (1 person = 0.85x, 4 people = 1.3x)."""
    return 0.7 + household_size * 0.15


def property_tax_for_source(resident: ResidentProfile, source: RevenueSource) -> float:
    """Annual property tax a resident pays to one property tax source.

    Real estate is taxed on the assessed home value for owners only. Personal
    property is taxed on registered vehicles at an assumed value, for owners
    and renters alike.
    """
    if source.property_class == PropertyClass.PERSONAL_PROPERTY:
        vehicles = resident.vehicles_registered or 0
        rate = _or_default(source.rate, DEFAULT_PERSONAL_PROPERTY_RATE)
        return vehicles * ASSUMED_VEHICLE_VALUE * rate

    if resident.housing_status != "own" or not resident.home_value:
        return 0.0
    assessed_value = resident.home_value * _or_default(source.base, DEFAULT_ASSESSMENT_RATIO)
    return assessed_value * _or_default(source.rate, DEFAULT_TAX_RATE)


def source_contribution(resident: ResidentProfile, source: RevenueSource) -> float:
    """Annual amount a resident pays toward a single revenue source."""
    income = resident.household_income

    if source.type == RevenueType.PROPERTY_TAX:
        return property_tax_for_source(resident, source)
    elif source.type == RevenueType.INCOME_TAX:
        return income * _or_default(source.rate, DEFAULT_TAX_RATE)
    elif source.type == RevenueType.WAGE_TAX:
        if not resident.works_locally:
            return 0.0
        return income * _or_default(source.rate, DEFAULT_TAX_RATE)
    elif source.type == RevenueType.SALES_TAX:
        estimated_spending = income * TAXABLE_SPENDING_RATIO
        return estimated_spending * _or_default(source.rate, DEFAULT_TAX_RATE)
    elif source.type == RevenueType.UTILITY_FEES:
        monthly_fee = _or_default(source.rate, DEFAULT_MONTHLY_UTILITY_FEE)
        return monthly_fee * utility_household_multiplier(resident.household_size) * 12
    elif source.type in (RevenueType.PERMITS_FEES, RevenueType.OTHER):
        return _or_default(source.rate, DEFAULT_PER_RESIDENT_FEE)
    elif source.type == RevenueType.GRANTS:
        return 0.0
    raise AssertionError(f"Unhandled revenue type: {source.type}")


def calculate_breakdown(
    resident: ResidentProfile, revenue_sources: Sequence[RevenueSource]
) -> ContributionBreakdown:
    """Calculate a resident's annual contribution by revenue bucket.

    Each source adds to exactly one bucket; several sources of the same type
    accumulate. Grants contribute nothing.

    Args:
        resident: Household profile
        revenue_sources: Jurisdiction's revenue sources, in declared order

    Returns:
        Breakdown with every bucket >= 0
    """
    breakdown = ContributionBreakdown()

    for source in revenue_sources:
        amount = source_contribution(resident, source)
        bucket = BREAKDOWN_BUCKETS[source.type]
        if bucket is not None:
            setattr(breakdown, bucket, getattr(breakdown, bucket) + amount)

        logger.debug(
            "revenue_source_applied",
            source_id=source.id,
            revenue_type=source.type.value,
            amount=amount,
        )

    return breakdown


def allocate_to_services(
    total_contribution: float, budget_categories: Sequence[BudgetCategory]
) -> list[ServiceAllocation]:
    """Split a contribution across budget categories by their share of spending.

    Args:
        total_contribution: Annual contribution to split
        budget_categories: Categories to fund (expected non-empty, positive total)

    Returns:
        One allocation per category, in category order. If the categories sum
        to zero every allocation is zero.
    """
    category_total = sum(category.amount for category in budget_categories)
    if category_total <= 0:
        logger.warning("budget_categories_sum_to_zero", categories=len(budget_categories))

    allocations = []
    for category in budget_categories:
        proportion = category.amount / category_total if category_total > 0 else 0.0
        annual = total_contribution * proportion
        allocations.append(
            ServiceAllocation(
                category_id=category.id,
                category_name=category.name,
                icon=category.icon,
                color=category.color,
                annual=annual,
                monthly=annual / 12,
                daily=annual / 365,
                description=category.description,
            )
        )
    return allocations


def compute_contribution(
    resident: ResidentProfile,
    jurisdiction: Jurisdiction,
    revenue_sources: Sequence[RevenueSource],
    budget_categories: Sequence[BudgetCategory],
) -> ResidentContribution:
    """Calculate a resident's total contribution to their jurisdiction.

    Args:
        resident: Household profile
        jurisdiction: Jurisdiction receiving the contribution
        revenue_sources: Jurisdiction's revenue sources
        budget_categories: Jurisdiction's budget categories

    Returns:
        Totals, per-bucket breakdown, share of budget and service allocations
    """
    breakdown = calculate_breakdown(resident, revenue_sources)
    total_annual = breakdown.total()

    percent_of_budget = 0.0
    if jurisdiction.total_budget > 0:
        percent_of_budget = total_annual / jurisdiction.total_budget * 100

    logger.debug(
        "contribution_computed",
        jurisdiction_id=jurisdiction.id,
        total_annual=total_annual,
        percent_of_budget=percent_of_budget,
    )

    return ResidentContribution(
        total_annual=total_annual,
        total_monthly=total_annual / 12,
        total_daily=total_annual / 365,
        breakdown=breakdown,
        percent_of_budget=percent_of_budget,
        service_allocations=allocate_to_services(total_annual, budget_categories),
    )
