"""Manifest model for listing bundled jurisdictions."""

from typing import Literal

from pydantic import BaseModel, Field


class JurisdictionEntry(BaseModel):
    """Single jurisdiction entry in the manifest."""

    id: str = Field(..., description="Jurisdiction identifier (e.g., 'liberty-township')")
    name: str = Field(..., description="Human-readable jurisdiction name")
    jurisdiction_type: str = Field(..., description="Type (e.g., 'township', 'city')")
    status: Literal["active", "coming_soon", "hidden"] = Field(..., description="Entry status")
    fiscal_year: str | None = Field(None, description="Fiscal year of the bundled data")
    population: int | None = Field(None, description="Resident population")
    total_budget: float | None = Field(None, description="Total annual budget in dollars")


class Manifest(BaseModel):
    """Manifest listing all bundled jurisdictions."""

    jurisdictions: list[JurisdictionEntry] = Field(..., description="List of all jurisdictions")
    default_jurisdiction: str | None = Field(None, description="Jurisdiction selected by default")
    last_updated: str = Field(..., description="ISO 8601 timestamp of last update")
