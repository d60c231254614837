"""Pydantic models for jurisdiction data and derived contribution results.

Attributes are snake_case in Python. The JSON exchange format uses camelCase
keys (``totalBudget``, ``fixedPercentage``, ...), handled by an alias
generator; models accept either spelling on input.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JurisdictionType = Literal["township", "city", "county", "village", "borough"]
Emphasis = Literal["systems_over_departments", "balanced_services", "departmental"]
HousingStatus = Literal["own", "rent"]
PayerType = Literal["residential", "commercial", "mixed", "government", "visitors"]
Severity = Literal["low", "medium", "high"]


class RevenueType(str, Enum):
    """Kind of revenue; determines the contribution formula."""

    PROPERTY_TAX = "property_tax"
    INCOME_TAX = "income_tax"
    WAGE_TAX = "wage_tax"
    SALES_TAX = "sales_tax"
    UTILITY_FEES = "utility_fees"
    PERMITS_FEES = "permits_fees"
    GRANTS = "grants"
    OTHER = "other"


class PropertyClass(str, Enum):
    """What a property tax source taxes."""

    REAL_ESTATE = "real_estate"
    PERSONAL_PROPERTY = "personal_property"


class ServiceIcon(str, Enum):
    """Icon tag attached to a budget category."""

    SHIELD = "shield"
    FLAME = "flame"
    ROAD = "road"
    TREES = "trees"
    BUILDING = "building"
    DROPLET = "droplet"
    BOOK = "book"
    HEART = "heart"
    TRUCK = "truck"
    LIGHTBULB = "lightbulb"
    GRADUATION_CAP = "graduation-cap"
    SCALE = "scale"
    SCALES = "scales"
    USERS = "users"
    HOME = "home"
    WALLET = "wallet"
    HAMMER = "hammer"
    GIFT = "gift"


ICON_LABELS: dict[ServiceIcon, str] = {
    ServiceIcon.SHIELD: "Public safety",
    ServiceIcon.FLAME: "Fire protection",
    ServiceIcon.ROAD: "Roads & infrastructure",
    ServiceIcon.TREES: "Parks",
    ServiceIcon.BUILDING: "Administration",
    ServiceIcon.DROPLET: "Water",
    ServiceIcon.BOOK: "Library",
    ServiceIcon.HEART: "Health",
    ServiceIcon.TRUCK: "Public works",
    ServiceIcon.LIGHTBULB: "Electric utilities",
    ServiceIcon.GRADUATION_CAP: "Education",
    ServiceIcon.SCALE: "Courts & legal",
    ServiceIcon.SCALES: "Courts & legal",
    ServiceIcon.USERS: "Community services",
    ServiceIcon.HOME: "Housing",
    ServiceIcon.WALLET: "Finance & debt",
    ServiceIcon.HAMMER: "Capital projects",
    ServiceIcon.GIFT: "Grants & contributions",
}


class CamelModel(BaseModel):
    """Base model serializing to the camelCase exchange format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JurisdictionConfig(CamelModel):
    """Display configuration for a jurisdiction."""

    max_categories: int = Field(..., gt=0, description="Maximum categories shown at once")
    emphasis: Emphasis = Field(..., description="How services are framed to residents")
    show_fixed_costs: bool = Field(..., description="Whether fixed costs are displayed")
    comparison_phrase: str = Field(
        ..., description="Phrase used in comparisons (e.g., 'city services')"
    )
    daily_rounding: float = Field(
        ..., gt=0, description="Granularity for daily amounts (e.g., 0.01, 0.1, 0.25)"
    )


class Jurisdiction(CamelModel):
    """A governing body with its own budget and revenue."""

    id: str = Field(..., min_length=1, description="Unique identifier (e.g., 'liberty-township')")
    name: str = Field(..., min_length=1, description="Display name")
    type: JurisdictionType = Field(..., description="Kind of government")
    state: str = Field(..., description="Two-letter state code")
    population: int = Field(..., gt=0, description="Resident population")
    median_home_value: float = Field(..., ge=0, description="Median home value in dollars")
    total_budget: float = Field(..., gt=0, description="Total annual budget in dollars")
    fiscal_year: str = Field(..., description="Fiscal year label (e.g., '2024')")
    governance_structure: str | None = Field(None, description="Governance label")
    config: JurisdictionConfig


class RevenueSource(CamelModel):
    """A tax or fee funding a jurisdiction's budget.

    The meaning of ``rate`` depends on ``type``: a decimal tax rate for income,
    wage and sales taxes, a decimal rate per assessed dollar for property tax,
    a monthly flat fee for utility fees and a per-resident estimate for
    permits, fees and other revenue.
    """

    id: str = Field(..., description="Unique source identifier")
    jurisdiction_id: str = Field(..., description="Owning jurisdiction")
    type: RevenueType = Field(..., description="Revenue type")
    name: str = Field(..., description="Display name")
    amount: float = Field(..., ge=0, description="Annual amount collected jurisdiction-wide")
    rate: float | None = Field(None, description="Type-dependent rate")
    base: float | None = Field(
        None, ge=0, le=1, description="Assessment ratio (property tax only)"
    )
    description: str | None = None
    payer: PayerType | None = Field(None, description="Primary payer type")
    residential_share: float | None = Field(
        None, ge=0, le=100, description="Percent of this source paid by residents"
    )
    property_class: PropertyClass | None = Field(
        None, description="What a property tax source taxes (default real estate)"
    )

    @property
    def effective_residential_share(self) -> float:
        """Residential share in percent; government sources are never residential."""
        if self.payer == "government":
            return 0.0
        return 100.0 if self.residential_share is None else self.residential_share


class BudgetSubcategory(CamelModel):
    """Line item within a budget category."""

    id: str
    name: str
    amount: float = Field(..., ge=0)
    description: str | None = None


class BudgetCategory(CamelModel):
    """A spending line item or department."""

    id: str = Field(..., description="Unique category identifier")
    jurisdiction_id: str = Field(..., description="Owning jurisdiction")
    name: str = Field(..., description="Display name")
    amount: float = Field(..., ge=0, description="Annual amount spent")
    fixed_percentage: float = Field(
        ..., ge=0, le=100, description="Non-discretionary share of the amount (0-100)"
    )
    icon: ServiceIcon
    color: str = Field(..., description="Display color (hex code)")
    description: str = Field(..., description="Plain-language description")
    constraints: list[str] | None = Field(
        None, description="Reasons the fixed portion cannot shrink"
    )
    subcategories: list[BudgetSubcategory] | None = None

    @property
    def fixed_amount(self) -> float:
        return self.amount * (self.fixed_percentage / 100)

    @property
    def discretionary_amount(self) -> float:
        return self.amount - self.fixed_amount


class ResidentProfile(CamelModel):
    """Household attributes used to estimate a resident's contribution."""

    id: str | None = None
    jurisdiction_id: str = Field(..., description="Jurisdiction the household lives in")
    housing_status: HousingStatus
    home_value: float | None = Field(None, ge=0, description="Home value (owners only)")
    annual_rent: float | None = Field(None, ge=0)
    household_income: float = Field(..., ge=0, description="Annual household income")
    works_locally: bool
    household_size: float = Field(
        ..., ge=0, description="People in the household (may be a statistical average)"
    )
    monthly_water_usage: float | None = Field(None, ge=0, description="Gallons per month")
    vehicles_registered: int | None = Field(None, ge=0)


class ContributionBreakdown(CamelModel):
    """Annual contribution split by revenue bucket."""

    property_tax: float = 0.0
    income_tax: float = 0.0
    wage_tax: float = 0.0
    sales_tax: float = 0.0
    utility_fees: float = 0.0
    other_fees: float = 0.0

    def total(self) -> float:
        return (
            self.property_tax
            + self.income_tax
            + self.wage_tax
            + self.sales_tax
            + self.utility_fees
            + self.other_fees
        )


class ServiceAllocation(CamelModel):
    """Share of a resident's contribution funding one budget category."""

    category_id: str
    category_name: str
    icon: ServiceIcon
    color: str
    annual: float
    monthly: float
    daily: float
    description: str


class ResidentContribution(CamelModel):
    """A resident's computed contribution. Always rebuilt from inputs, never stored."""

    total_annual: float
    total_monthly: float
    total_daily: float
    breakdown: ContributionBreakdown
    percent_of_budget: float
    service_allocations: list[ServiceAllocation]


class CategoryAdjustment(CamelModel):
    """Hypothetical change to one category's amount within a scenario."""

    category_id: str
    original_amount: float
    new_amount: float
    percent_change: float


class ServiceImplication(CamelModel):
    """Qualitative description of what an adjustment means for a service."""

    category_id: str
    category_name: str
    change_description: str
    severity: Severity


class ScenarioImpact(CamelModel):
    """Validation verdict and impact of a set of adjustments.

    ``tax_impact`` and ``budget_change`` both carry aggregate dollar changes;
    see ``tax_impact_per_resident`` for the per-resident figure.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    tax_impact: float
    budget_change: float
    service_implications: list[ServiceImplication] = Field(default_factory=list)


class RevenueAttribution(CamelModel):
    """Who funds a jurisdiction: totals and percentages by payer group."""

    total_revenue: float
    residential_total: float
    commercial_total: float
    government_total: float
    visitor_total: float
    residential_percent: float
    commercial_percent: float
    government_percent: float
    visitor_percent: float
    your_percent_of_residential: float


class JurisdictionData(CamelModel):
    """Complete snapshot for one jurisdiction: the import/export document."""

    jurisdiction: Jurisdiction
    budget_categories: list[BudgetCategory] = Field(..., min_length=1)
    revenue_sources: list[RevenueSource] = Field(..., min_length=1)
    average_resident: ResidentProfile | None = None


class ContributionSummary(CamelModel):
    """Shareable summary card of a resident's contribution."""

    jurisdiction: Jurisdiction
    profile: ResidentProfile
    contribution: ResidentContribution
    comparisons: list[str] = Field(default_factory=list)
    generated_at: datetime
