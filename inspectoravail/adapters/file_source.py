"""
Schedule source backed by an exported JSON or YAML file.

Useful for local runs and tests without a database. The file mirrors the
stored collections:

    companies:     [{_id, name, availabilityViewMode}]
    inspectors:    [{_id, company, firstName, lastName, isActive}]
    availability:  [{company, inspector, days, dateSpecific}]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..domain.exceptions import ScheduleSourceError
from ..domain.models import Availability, Inspector, ViewMode
from .documents import AvailabilityDocument, CompanyDocument, InspectorDocument

logger = logging.getLogger(__name__)


class FileScheduleSource:
    """
    Read-only schedule source loaded once from a data file.

    Implements the schedule source protocol used by the booking service.
    """

    def __init__(self, data_file: Path, default_view_mode: ViewMode | None = None):
        """
        Load and validate the data file.

        Args:
            data_file: Path to a ``.json``, ``.yaml`` or ``.yml`` file
            default_view_mode: View mode for companies missing from the file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ScheduleSourceError: If the file cannot be parsed
        """
        self.data_file = Path(data_file)
        self.default_view_mode = default_view_mode or ViewMode.default()
        self._companies: Dict[str, CompanyDocument] = {}
        self._inspectors: List[InspectorDocument] = []
        self._availability: Dict[Tuple[str, str], AvailabilityDocument] = {}
        self._load()

    def _load(self) -> None:
        if not self.data_file.exists():
            raise FileNotFoundError(f"Schedule data file not found: {self.data_file}")

        data = self._read_raw()

        try:
            for raw in data.get("companies") or []:
                company = CompanyDocument.model_validate(raw)
                self._companies[company.id] = company

            self._inspectors = [
                InspectorDocument.model_validate(raw) for raw in data.get("inspectors") or []
            ]

            for raw in data.get("availability") or []:
                document = AvailabilityDocument.model_validate(raw)
                if not document.company or not document.inspector:
                    logger.warning("Skipping availability document without company or inspector")
                    continue
                self._availability[(document.company, document.inspector)] = document
        except ValidationError as exc:
            raise ScheduleSourceError(f"Invalid schedule data in {self.data_file}: {exc}") from exc

        logger.debug(
            "Loaded %d companies, %d inspectors, %d availability documents from %s",
            len(self._companies),
            len(self._inspectors),
            len(self._availability),
            self.data_file,
        )

    def _read_raw(self) -> Dict[str, Any]:
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                if self.data_file.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ScheduleSourceError(f"Cannot parse {self.data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise ScheduleSourceError("Schedule data must contain a mapping at the root level.")
        return data

    def has_company(self, company_id: str) -> bool:
        return company_id in self._companies

    async def get_view_mode(self, company_id: str) -> ViewMode:
        """Company view mode, or the configured default when the company has no entry."""
        company = self._companies.get(company_id)
        if company is None:
            return self.default_view_mode
        return company.availability_view_mode

    async def get_availability(self, company_id: str, inspector_id: str) -> Optional[Availability]:
        document = self._availability.get((company_id, inspector_id))
        if document is None:
            return None
        return document.to_availability()

    async def list_inspectors(self, company_id: str) -> List[Inspector]:
        """
        Active inspectors of a company, sorted by first and last name.

        Without an ``inspectors`` section, every inspector that has an
        availability document in the company is listed by id.
        """
        if self._inspectors:
            members = [
                doc for doc in self._inspectors
                if doc.company == company_id and doc.is_active
            ]
            members.sort(key=lambda doc: (doc.first_name.lower(), doc.last_name.lower()))
            return [doc.to_domain() for doc in members]

        return [
            Inspector(inspector_id=inspector_id)
            for company, inspector_id in sorted(self._availability)
            if company == company_id
        ]
