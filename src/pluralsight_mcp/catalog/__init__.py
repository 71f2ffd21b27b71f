"""Catalog access — records, fixture data and the remote API client."""

from pluralsight_mcp.catalog.client import CatalogClient, Fetched
from pluralsight_mcp.catalog.models import (
    Course,
    LearningPath,
    MalformedPayload,
    SkillAssessment,
    UserProgress,
)

__all__ = [
    "CatalogClient",
    "Fetched",
    "Course",
    "LearningPath",
    "MalformedPayload",
    "SkillAssessment",
    "UserProgress",
]
