"""Extractor for jurisdiction data stored as JSON files."""

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from ..models.schema import JurisdictionData
from .base import BaseExtractor

logger = structlog.get_logger()


def load_jurisdiction_file(path: Path) -> JurisdictionData:
    """Parse a JurisdictionData JSON document.

    Args:
        path: Path to the JSON file

    Returns:
        Validated jurisdiction snapshot

    Raises:
        ValueError: If the file is not valid JSON or does not match the schema
    """
    try:
        with open(path) as f:
            data_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    try:
        return JurisdictionData.model_validate(data_dict)
    except ValidationError as e:
        raise ValueError(f"{path} does not match the jurisdiction data format: {e}") from e


class JsonFileExtractor(BaseExtractor):
    """Loads jurisdictions from the JSON files listed in jurisdictions.yaml."""

    def __init__(self, config: dict[str, Any], base_dir: Path | None = None) -> None:
        """Initialize JSON extractor.

        Args:
            config: Configuration with 'data_dir' and 'jurisdictions' sections
            base_dir: Directory relative paths are resolved against
        """
        super().__init__(config)

        if "jurisdictions" not in config:
            raise ValueError("Config must include 'jurisdictions' section")

        self.base_dir = base_dir or Path.cwd()
        self.data_dir = self.base_dir / config.get("data_dir", "data")
        self.jurisdictions: dict[str, Any] = config["jurisdictions"]

    def available_jurisdictions(self) -> list[str]:
        return sorted(self.jurisdictions.keys())

    def path_for(self, jurisdiction_id: str) -> Path:
        if jurisdiction_id not in self.jurisdictions:
            available = ", ".join(self.available_jurisdictions())
            raise ValueError(
                f"Jurisdiction '{jurisdiction_id}' not found in config. Available: {available}"
            )
        entry = self.jurisdictions[jurisdiction_id] or {}
        return self.data_dir / entry.get("file", f"{jurisdiction_id}.json")

    def extract(self, jurisdiction_id: str) -> JurisdictionData:
        path = self.path_for(jurisdiction_id)
        if not path.exists():
            raise ValueError(f"Data file for '{jurisdiction_id}' not found: {path}")

        data = load_jurisdiction_file(path)
        if data.jurisdiction.id != jurisdiction_id:
            raise ValueError(
                f"{path} contains jurisdiction '{data.jurisdiction.id}', "
                f"expected '{jurisdiction_id}'"
            )

        logger.info("jurisdiction_extracted", jurisdiction_id=jurisdiction_id, path=str(path))
        return data
