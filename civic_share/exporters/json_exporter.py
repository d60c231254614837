"""JSON export of jurisdiction data and contribution summaries."""

import json
from datetime import datetime
from pathlib import Path

import structlog

from ..models.schema import (
    ContributionSummary,
    Jurisdiction,
    JurisdictionData,
    ResidentContribution,
    ResidentProfile,
)
from ..utils.formatting import generate_comparison_text
from .base import BaseExporter

logger = structlog.get_logger()


def build_summary(
    jurisdiction: Jurisdiction,
    profile: ResidentProfile,
    contribution: ResidentContribution,
    generated_at: datetime | None = None,
) -> ContributionSummary:
    """Assemble the shareable summary card for a computed contribution."""
    return ContributionSummary(
        jurisdiction=jurisdiction,
        profile=profile,
        contribution=contribution,
        comparisons=generate_comparison_text(contribution, jurisdiction),
        generated_at=generated_at or datetime.now(),
    )


def write_jurisdiction_data(data: JurisdictionData, path: Path) -> Path:
    """Write a jurisdiction snapshot in the camelCase import/export format."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data.model_dump(mode="json", by_alias=True, exclude_none=True), f, indent=2)

    logger.info("jurisdiction_data_written", jurisdiction_id=data.jurisdiction.id, path=str(path))
    return path


class JsonExporter(BaseExporter):
    """Writes the full summary card as JSON."""

    extension = "json"

    def export(self, summary: ContributionSummary, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(
                summary.model_dump(mode="json", by_alias=True, exclude_none=True),
                f,
                indent=2,
                ensure_ascii=False,
            )

        logger.info("summary_exported", format="json", path=str(path))
        return path
