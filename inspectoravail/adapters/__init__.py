"""
Adapters layer - Persisted document shapes and file-backed schedule data.
"""

from .documents import (
    AvailabilityDocument,
    CompanyDocument,
    InspectorDocument,
    availability_from_document,
    view_mode_from_company,
)
from .file_source import FileScheduleSource

__all__ = [
    "AvailabilityDocument",
    "CompanyDocument",
    "FileScheduleSource",
    "InspectorDocument",
    "availability_from_document",
    "view_mode_from_company",
]
