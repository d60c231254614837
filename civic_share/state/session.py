"""Application state for one resident's session.

``BudgetSession`` owns the currently selected jurisdiction snapshot, the
resident profile and an optional budget scenario. Every setter rebuilds the
derived values from scratch with the pure calculators; nothing is updated
incrementally.
"""

from typing import Any
from uuid import uuid4

import structlog

from ..calculators.contribution import compute_contribution
from ..calculators.scenario import build_adjustment, validate_adjustments
from ..models.schema import (
    BudgetCategory,
    CategoryAdjustment,
    Jurisdiction,
    JurisdictionData,
    ResidentContribution,
    ResidentProfile,
    RevenueSource,
    ScenarioImpact,
)

logger = structlog.get_logger()


class Scenario:
    """A named set of adjustments against the session's budget."""

    def __init__(self, jurisdiction_id: str, name: str = "New Scenario") -> None:
        self.id = str(uuid4())
        self.jurisdiction_id = jurisdiction_id
        self.name = name
        self.adjustments: list[CategoryAdjustment] = []


class BudgetSession:
    """Explicit state-transition object for the calculator and simulator."""

    def __init__(self) -> None:
        self.jurisdiction: Jurisdiction | None = None
        self.budget_categories: list[BudgetCategory] = []
        self.revenue_sources: list[RevenueSource] = []
        self.resident_profile: ResidentProfile | None = None
        self.contribution: ResidentContribution | None = None
        self.scenario: Scenario | None = None
        self.scenario_categories: list[BudgetCategory] = []

    def load(self, data: JurisdictionData) -> None:
        """Replace the jurisdiction, its categories and its revenue sources as one set.

        Any scenario in progress is discarded. The bundled average resident,
        if present, becomes the current profile.
        """
        self.jurisdiction = data.jurisdiction
        self.budget_categories = list(data.budget_categories)
        self.revenue_sources = list(data.revenue_sources)
        self.scenario = None
        self.scenario_categories = list(self.budget_categories)

        if data.average_resident is not None:
            self.resident_profile = data.average_resident

        logger.info(
            "jurisdiction_loaded",
            jurisdiction_id=data.jurisdiction.id,
            categories=len(self.budget_categories),
            revenue_sources=len(self.revenue_sources),
        )
        self.recalculate()

    def set_resident_profile(self, profile: ResidentProfile) -> None:
        self.resident_profile = profile
        self.recalculate()

    def recalculate(self) -> ResidentContribution | None:
        """Recompute the contribution; ``None`` while any input is missing."""
        if (
            self.jurisdiction is None
            or self.resident_profile is None
            or not self.revenue_sources
            or not self.budget_categories
        ):
            self.contribution = None
            return None

        self.contribution = compute_contribution(
            self.resident_profile,
            self.jurisdiction,
            self.revenue_sources,
            self.budget_categories,
        )
        return self.contribution

    def start_scenario(self, name: str = "New Scenario") -> Scenario | None:
        """Begin a scenario from the original budget. Needs a jurisdiction and profile."""
        if self.jurisdiction is None or self.resident_profile is None:
            return None
        self.scenario = Scenario(self.jurisdiction.id, name)
        self.scenario_categories = list(self.budget_categories)
        return self.scenario

    def adjust_category(self, category_id: str, new_amount: float) -> bool:
        """Set a category's scenario amount, replacing any earlier adjustment to it.

        Returns:
            False if no scenario is active or the category is unknown
        """
        if self.scenario is None:
            return False

        original = next((c for c in self.budget_categories if c.id == category_id), None)
        if original is None:
            return False

        self.scenario_categories = [
            category.model_copy(update={"amount": new_amount})
            if category.id == category_id
            else category
            for category in self.scenario_categories
        ]

        adjustment = build_adjustment(original, new_amount)
        adjustments = self.scenario.adjustments
        for i, existing in enumerate(adjustments):
            if existing.category_id == category_id:
                adjustments[i] = adjustment
                break
        else:
            adjustments.append(adjustment)
        return True

    def scenario_impact(self) -> ScenarioImpact | None:
        if self.scenario is None:
            return None
        return validate_adjustments(self.budget_categories, self.scenario.adjustments)

    def reset_scenario(self) -> None:
        self.scenario = None
        self.scenario_categories = list(self.budget_categories)

    def reset_all(self) -> None:
        self.jurisdiction = None
        self.budget_categories = []
        self.revenue_sources = []
        self.resident_profile = None
        self.contribution = None
        self.reset_scenario()

    def snapshot(self) -> dict[str, Any]:
        """Persisted subset of the session as JSON-ready data (camelCase keys)."""

        def dump(model: Any) -> Any:
            if model is None:
                return None
            return model.model_dump(mode="json", by_alias=True, exclude_none=True)

        return {
            "jurisdiction": dump(self.jurisdiction),
            "budgetCategories": [dump(c) for c in self.budget_categories],
            "revenueSources": [dump(s) for s in self.revenue_sources],
            "residentProfile": dump(self.resident_profile),
        }

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> "BudgetSession":
        """Restore a session saved with ``snapshot``."""
        session = cls()
        if snapshot.get("jurisdiction") is not None:
            session.jurisdiction = Jurisdiction.model_validate(snapshot["jurisdiction"])
        session.budget_categories = [
            BudgetCategory.model_validate(c) for c in snapshot.get("budgetCategories", [])
        ]
        session.revenue_sources = [
            RevenueSource.model_validate(s) for s in snapshot.get("revenueSources", [])
        ]
        session.scenario_categories = list(session.budget_categories)
        if snapshot.get("residentProfile") is not None:
            session.resident_profile = ResidentProfile.model_validate(
                snapshot["residentProfile"]
            )
        session.recalculate()
        return session
