from enum import StrEnum


class ProjectStatus(StrEnum):
    """Project lifecycle state."""

    ACTIVE = "active"
    ARCHIVED = "archived"
