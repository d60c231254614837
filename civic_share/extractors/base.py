"""Abstract base extractor for jurisdiction data sources."""

from abc import ABC, abstractmethod
from typing import Any

from ..models.schema import JurisdictionData


class BaseExtractor(ABC):
    """Abstract base class for jurisdiction data extractors.

    Extractors are responsible for loading a jurisdiction's budget snapshot
    from some source (bundled JSON files, user uploads, etc.) and returning it
    as a validated JurisdictionData model.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize extractor with configuration.

        Args:
            config: Configuration dictionary from jurisdictions.yaml
        """
        self.config = config

    @abstractmethod
    def extract(self, jurisdiction_id: str) -> JurisdictionData:
        """Load data for one jurisdiction.

        Args:
            jurisdiction_id: Jurisdiction identifier (e.g., 'liberty-township')

        Returns:
            Validated jurisdiction snapshot

        Raises:
            ValueError: If the jurisdiction is unknown or its data is malformed
        """
        pass

    @abstractmethod
    def available_jurisdictions(self) -> list[str]:
        """Get list of jurisdiction identifiers this extractor can load."""
        pass
