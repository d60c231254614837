"""CSV export of a contribution's service allocations."""

from pathlib import Path

import pandas as pd
import structlog

from ..models.schema import ContributionSummary, ResidentContribution
from ..utils.formatting import round_daily
from .base import BaseExporter

logger = structlog.get_logger()

ALLOCATION_COLUMNS = ["category_id", "category_name", "annual", "monthly", "daily", "share_pct"]


def allocations_frame(
    contribution: ResidentContribution, daily_rounding: float = 0.01
) -> pd.DataFrame:
    """Build a table with one row per budget category.

    Args:
        contribution: Computed contribution
        daily_rounding: Granularity applied to the daily column

    Returns:
        DataFrame with ALLOCATION_COLUMNS, largest allocation first
    """
    rows = [
        {
            "category_id": allocation.category_id,
            "category_name": allocation.category_name,
            "annual": round(allocation.annual, 2),
            "monthly": round(allocation.monthly, 2),
            "daily": round_daily(allocation.daily, daily_rounding),
            "share_pct": (
                allocation.annual / contribution.total_annual * 100
                if contribution.total_annual > 0
                else 0.0
            ),
        }
        for allocation in contribution.service_allocations
    ]
    df = pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)
    df["share_pct"] = df["share_pct"].round(2)
    return df.sort_values("annual", ascending=False, kind="stable").reset_index(drop=True)


class CsvExporter(BaseExporter):
    """Writes the allocation table as CSV."""

    extension = "csv"

    def export(self, summary: ContributionSummary, path: Path) -> Path:
        df = allocations_frame(
            summary.contribution, summary.jurisdiction.config.daily_rounding
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

        logger.info("summary_exported", format="csv", path=str(path), rows=len(df))
        return path
