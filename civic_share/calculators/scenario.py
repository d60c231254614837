"""Budget scenario validation.

A scenario is a set of hypothetical per-category amount changes. Validation
never raises: unknown categories and cuts below a category's fixed floor are
reported as readable errors, and the impact numbers are returned either way so
callers can show what would happen alongside why it is not allowed.
"""

from collections.abc import Sequence

import structlog

from ..models.schema import (
    BudgetCategory,
    CategoryAdjustment,
    ScenarioImpact,
    ServiceImplication,
    Severity,
)
from ..utils.formatting import format_currency

logger = structlog.get_logger()

# Sliders may raise a category by this fraction of its discretionary amount
MAX_INCREASE_OF_DISCRETIONARY = 0.5


def build_adjustment(category: BudgetCategory, new_amount: float) -> CategoryAdjustment:
    """Record a change of ``category`` to ``new_amount``."""
    percent_change = 0.0
    if category.amount > 0:
        percent_change = (new_amount - category.amount) / category.amount * 100
    return CategoryAdjustment(
        category_id=category.id,
        original_amount=category.amount,
        new_amount=new_amount,
        percent_change=percent_change,
    )


def adjustment_bounds(category: BudgetCategory) -> tuple[float, float]:
    """Slider range for a category: its fixed floor up to half its discretionary headroom.

    Only the floor is a validation rule; the ceiling is advisory.
    """
    ceiling = category.amount + category.discretionary_amount * MAX_INCREASE_OF_DISCRETIONARY
    return category.fixed_amount, ceiling


def classify_change(category_name: str, percent_change: float) -> tuple[str, Severity]:
    """Describe a percent change to a category's funding.

    Args:
        category_name: Category display name
        percent_change: Change relative to the category's original amount

    Returns:
        Tuple of (description, severity)
    """
    name = category_name.lower()
    if percent_change < -20:
        return f"Significant reduction in {name} services", "high"
    elif percent_change < -10:
        return f"Moderate reduction in {name} capacity", "medium"
    elif percent_change < 0:
        return f"Minor adjustments to {name}", "low"
    elif percent_change > 20:
        return f"Major expansion of {name} services", "low"
    return f"Enhanced {name} capacity", "low"


def validate_adjustments(
    original: Sequence[BudgetCategory], adjustments: Sequence[CategoryAdjustment]
) -> ScenarioImpact:
    """Validate budget adjustments against each category's fixed floor.

    Args:
        original: Unmodified budget categories
        adjustments: Proposed changes; ``original_amount`` is taken from each
            adjustment as recorded

    Returns:
        Verdict, errors, aggregate impact and per-category implications
    """
    errors: list[str] = []
    implications: list[ServiceImplication] = []
    categories = {category.id: category for category in original}

    original_total = sum(category.amount for category in original)
    new_total = original_total

    for adjustment in adjustments:
        category = categories.get(adjustment.category_id)
        if category is None:
            errors.append(f"Category {adjustment.category_id} not found")
            continue

        fixed_amount = category.fixed_amount
        change = adjustment.new_amount - adjustment.original_amount
        new_total += change

        if adjustment.new_amount < fixed_amount:
            reasons = ", ".join(category.constraints or []) or "fixed obligations"
            errors.append(
                f"{category.name} cannot go below {format_currency(fixed_amount, False)} "
                f"due to: {reasons}"
            )

        if change != 0:
            if category.amount > 0:
                percent_change = change / category.amount * 100
            else:
                # Unfunded category: any increase is an expansion
                percent_change = 100.0 if change > 0 else -100.0
            description, severity = classify_change(category.name, percent_change)
            implications.append(
                ServiceImplication(
                    category_id=category.id,
                    category_name=category.name,
                    change_description=description,
                    severity=severity,
                )
            )

    total_change = sum(adj.new_amount - adj.original_amount for adj in adjustments)

    logger.debug(
        "scenario_validated",
        adjustments=len(adjustments),
        errors=len(errors),
        budget_change=new_total - original_total,
    )

    return ScenarioImpact(
        valid=not errors,
        errors=errors,
        tax_impact=total_change,
        budget_change=new_total - original_total,
        service_implications=implications,
    )


def tax_impact_per_resident(impact: ScenarioImpact, population: int) -> float:
    """Budget change spread evenly across residents (positive = higher taxes)."""
    if population <= 0:
        return 0.0
    return impact.budget_change / population
