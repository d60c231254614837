"""Abstract base exporter for writing contribution results."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models.schema import ContributionSummary


class BaseExporter(ABC):
    """Abstract base class for exporters.

    Exporters turn a ContributionSummary into a shareable file. Each format
    decides which parts of the summary it carries.
    """

    extension: str = ""

    def output_path(self, output_dir: Path, summary: ContributionSummary) -> Path:
        """Default file name for a summary (e.g., 'liberty-township-summary.json')."""
        return output_dir / f"{summary.jurisdiction.id}-summary.{self.extension}"

    @abstractmethod
    def export(self, summary: ContributionSummary, path: Path) -> Path:
        """Write a summary to ``path``.

        Args:
            summary: Contribution summary to export
            path: Destination file

        Returns:
            Path that was written
        """
        pass
