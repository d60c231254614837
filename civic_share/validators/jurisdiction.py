"""Jurisdiction data validator for checking imported data quality."""

from ..models.schema import JurisdictionData


class JurisdictionValidator:
    """Validator for jurisdiction data quality checks.

    Schema-level rules (positive budget, non-empty lists, value ranges) are
    already enforced by Pydantic. This validator adds cross-record checks:
    ID uniqueness and ownership as errors, budget/revenue totals and display
    limits as warnings.
    """

    def __init__(self, tolerance_pct: float = 5.0) -> None:
        """Initialize validator.

        Args:
            tolerance_pct: Allowed gap between total budget and the category
                or revenue sums, as a percent of total budget
        """
        self.tolerance_pct = tolerance_pct
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self, data: JurisdictionData) -> bool:
        """Validate jurisdiction data.

        Args:
            data: JurisdictionData to validate

        Returns:
            True if validation passes, False if errors found
        """
        self.errors = []
        self.warnings = []

        # 1. Schema validation (already done by Pydantic)

        # 2. ID uniqueness and ownership
        self._validate_unique_ids(data)
        self._validate_ownership(data)

        # 3. Totals (advisory: a known mismatch is tolerated)
        self._validate_category_sum(data)
        self._validate_revenue_sum(data)

        # 4. Display configuration
        self._validate_category_count(data)

        return len(self.errors) == 0

    def _validate_unique_ids(self, data: JurisdictionData) -> None:
        """Check that category and revenue source IDs are unique."""
        category_ids = [c.id for c in data.budget_categories]
        if len(category_ids) != len(set(category_ids)):
            duplicates = [cid for cid in category_ids if category_ids.count(cid) > 1]
            self.errors.append(f"Duplicate budget category IDs found: {sorted(set(duplicates))}")

        source_ids = [s.id for s in data.revenue_sources]
        if len(source_ids) != len(set(source_ids)):
            duplicates = [sid for sid in source_ids if source_ids.count(sid) > 1]
            self.errors.append(f"Duplicate revenue source IDs found: {sorted(set(duplicates))}")

    def _validate_ownership(self, data: JurisdictionData) -> None:
        """Check that every record belongs to the jurisdiction it ships with."""
        jurisdiction_id = data.jurisdiction.id

        for category in data.budget_categories:
            if category.jurisdiction_id != jurisdiction_id:
                self.errors.append(
                    f"Budget category '{category.id}' belongs to '{category.jurisdiction_id}', "
                    f"not '{jurisdiction_id}'"
                )

        for source in data.revenue_sources:
            if source.jurisdiction_id != jurisdiction_id:
                self.errors.append(
                    f"Revenue source '{source.id}' belongs to '{source.jurisdiction_id}', "
                    f"not '{jurisdiction_id}'"
                )

        resident = data.average_resident
        if resident is not None and resident.jurisdiction_id != jurisdiction_id:
            self.errors.append(
                f"Average resident belongs to '{resident.jurisdiction_id}', "
                f"not '{jurisdiction_id}'"
            )

    def _gap_pct(self, amount: float, total: float) -> float:
        return abs(amount - total) / total * 100

    def _validate_category_sum(self, data: JurisdictionData) -> None:
        """Check that budget categories approximately sum to the total budget."""
        category_sum = sum(c.amount for c in data.budget_categories)
        total = data.jurisdiction.total_budget

        gap_pct = self._gap_pct(category_sum, total)
        if gap_pct > self.tolerance_pct:
            self.warnings.append(
                f"Budget category sum (${category_sum:,.0f}) differs from total budget "
                f"(${total:,.0f}) by {gap_pct:.1f}%"
            )

    def _validate_revenue_sum(self, data: JurisdictionData) -> None:
        """Check that revenue sources approximately sum to the total budget.

        A gap may indicate debt financing or fund balance usage.
        """
        revenue_sum = sum(s.amount for s in data.revenue_sources)
        total = data.jurisdiction.total_budget

        gap_pct = self._gap_pct(revenue_sum, total)
        if gap_pct > self.tolerance_pct:
            self.warnings.append(
                f"Revenue sum (${revenue_sum:,.0f}) differs from total budget "
                f"(${total:,.0f}) by {gap_pct:.1f}%. This may indicate debt financing "
                f"or fund balance usage."
            )

    def _validate_category_count(self, data: JurisdictionData) -> None:
        max_categories = data.jurisdiction.config.max_categories
        if len(data.budget_categories) > max_categories:
            self.warnings.append(
                f"{len(data.budget_categories)} budget categories exceed the configured "
                f"maximum of {max_categories}"
            )

    def get_report(self) -> str:
        """Get validation report as formatted string.

        Returns:
            Multi-line report with errors and warnings
        """
        lines = []

        if self.errors:
            lines.append("ERRORS:")
            for error in self.errors:
                lines.append(f"  ❌ {error}")

        if self.warnings:
            if lines:
                lines.append("")
            lines.append("WARNINGS:")
            for warning in self.warnings:
                lines.append(f"  ⚠️  {warning}")

        if not self.errors and not self.warnings:
            lines.append("✅ All validation checks passed")

        return "\n".join(lines)
