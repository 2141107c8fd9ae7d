"""Cross-cutting services shared by the domain layer."""
from __future__ import annotations

from .activity_log import ActivityService, ActivityType

__all__ = [
    "ActivityService",
    "ActivityType",
]
