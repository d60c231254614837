"""Tests for Pydantic schema models."""

import pytest
from pydantic import ValidationError

from civic_share.models.schema import (
    ICON_LABELS,
    BudgetCategory,
    ContributionBreakdown,
    Jurisdiction,
    JurisdictionConfig,
    JurisdictionData,
    PropertyClass,
    ResidentProfile,
    RevenueSource,
    RevenueType,
    ServiceIcon,
)
from tests.factories import make_category, make_jurisdiction, make_resident, make_source


class TestJurisdiction:
    """Tests for Jurisdiction model."""

    def test_valid_jurisdiction(self):
        """Test creating valid Jurisdiction."""
        jurisdiction = make_jurisdiction(total_budget=2850000, population=3200)
        assert jurisdiction.total_budget == 2850000
        assert jurisdiction.population == 3200
        assert jurisdiction.governance_structure is None

    @pytest.mark.parametrize("field,value", [("population", 0), ("total_budget", 0)])
    def test_non_positive_values_rejected(self, field, value):
        """Test that population and total budget must be positive."""
        fields = make_jurisdiction().model_dump()
        fields[field] = value
        with pytest.raises(ValidationError):
            Jurisdiction(**fields)

    def test_unknown_type_rejected(self):
        """Test that jurisdiction type is a closed set."""
        fields = make_jurisdiction().model_dump()
        fields["type"] = "metropolis"
        with pytest.raises(ValidationError):
            Jurisdiction(**fields)

    def test_daily_rounding_must_be_positive(self):
        """Test that a zero daily rounding is rejected."""
        with pytest.raises(ValidationError):
            JurisdictionConfig(
                max_categories=5,
                emphasis="departmental",
                show_fixed_costs=False,
                comparison_phrase="services",
                daily_rounding=0,
            )

    def test_accepts_camel_case_keys(self):
        """Test that the camelCase exchange format parses."""
        jurisdiction = Jurisdiction.model_validate(
            {
                "id": "j",
                "name": "J",
                "type": "village",
                "state": "PA",
                "population": 10,
                "medianHomeValue": 1,
                "totalBudget": 100,
                "fiscalYear": "2024",
                "config": {
                    "maxCategories": 3,
                    "emphasis": "departmental",
                    "showFixedCosts": True,
                    "comparisonPhrase": "village services",
                    "dailyRounding": 0.25,
                },
            }
        )
        assert jurisdiction.median_home_value == 1
        assert jurisdiction.config.daily_rounding == 0.25

    def test_dumps_camel_case_keys(self):
        """Test that exports use camelCase keys."""
        dumped = make_jurisdiction().model_dump(by_alias=True)
        assert "totalBudget" in dumped
        assert "dailyRounding" in dumped["config"]


class TestRevenueSource:
    """Tests for RevenueSource model."""

    def test_type_is_enum(self):
        source = make_source("wage_tax", rate=0.01)
        assert source.type is RevenueType.WAGE_TAX

    def test_residential_share_defaults_to_100(self):
        """Test that an unset residential share means fully residential."""
        source = make_source("income_tax")
        assert source.residential_share is None
        assert source.effective_residential_share == 100

    def test_government_source_never_residential(self):
        """Test that government sources ignore a declared residential share."""
        source = make_source("grants", payer="government", residential_share=40)
        assert source.effective_residential_share == 0

    def test_residential_share_range(self):
        with pytest.raises(ValidationError):
            make_source("income_tax", residential_share=120)

    def test_base_range(self):
        """Test that assessment ratio must be between 0 and 1."""
        with pytest.raises(ValidationError):
            make_source("property_tax", base=1.5)

    def test_property_class(self):
        source = RevenueSource.model_validate(
            {
                "id": "pp",
                "jurisdictionId": "test-town",
                "type": "property_tax",
                "name": "Personal Property Tax",
                "amount": 1000,
                "propertyClass": "personal_property",
            }
        )
        assert source.property_class is PropertyClass.PERSONAL_PROPERTY


class TestBudgetCategory:
    """Tests for BudgetCategory model."""

    def test_fixed_and_discretionary_amounts(self):
        category = make_category("police", 1000, 80)
        assert category.fixed_amount == pytest.approx(800)
        assert category.discretionary_amount == pytest.approx(200)
        assert category.fixed_amount <= category.amount

    @pytest.mark.parametrize("fixed_percentage", [-1, 101])
    def test_fixed_percentage_range(self, fixed_percentage):
        with pytest.raises(ValidationError):
            make_category("police", 1000, fixed_percentage)

    def test_unknown_icon_rejected(self):
        fields = make_category("police", 1000).model_dump()
        fields["icon"] = "rocket"
        with pytest.raises(ValidationError):
            BudgetCategory(**fields)


class TestServiceIcon:
    def test_every_icon_has_a_label(self):
        """Test that the icon label table covers every icon."""
        assert set(ICON_LABELS) == set(ServiceIcon)


class TestResidentProfile:
    """Tests for ResidentProfile model."""

    def test_fractional_household_size(self):
        """Test that household size may be a statistical average."""
        resident = make_resident(household_size=2.4)
        assert resident.household_size == 2.4

    def test_negative_income_rejected(self):
        with pytest.raises(ValidationError):
            make_resident(household_income=-1)

    def test_unknown_housing_status_rejected(self):
        with pytest.raises(ValidationError):
            make_resident(housing_status="lease")

    def test_renter_without_home_value(self):
        resident = ResidentProfile(
            jurisdiction_id="test-town",
            housing_status="rent",
            household_income=40000,
            works_locally=False,
            household_size=1,
        )
        assert resident.home_value is None


class TestContributionBreakdown:
    def test_total(self):
        breakdown = ContributionBreakdown(property_tax=2000, income_tax=650, other_fees=100)
        assert breakdown.total() == pytest.approx(2750)


class TestJurisdictionData:
    """Tests for JurisdictionData model."""

    def test_requires_categories(self):
        """Test that an empty category list is rejected."""
        with pytest.raises(ValidationError):
            JurisdictionData(
                jurisdiction=make_jurisdiction(),
                budget_categories=[],
                revenue_sources=[make_source("income_tax")],
            )

    def test_requires_revenue_sources(self):
        """Test that an empty revenue source list is rejected."""
        with pytest.raises(ValidationError):
            JurisdictionData(
                jurisdiction=make_jurisdiction(),
                budget_categories=[make_category("police", 1000)],
                revenue_sources=[],
            )

    def test_average_resident_optional(self):
        data = JurisdictionData(
            jurisdiction=make_jurisdiction(),
            budget_categories=[make_category("police", 1000)],
            revenue_sources=[make_source("income_tax")],
        )
        assert data.average_resident is None

    def test_bundled_township_parses(self, township_data):
        """Test that the bundled sample data matches the schema."""
        assert township_data.jurisdiction.id == "liberty-township"
        assert len(township_data.budget_categories) == 5
        assert township_data.average_resident is not None
        assert township_data.average_resident.household_size == 2.4
