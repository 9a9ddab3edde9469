from enum import StrEnum


class TaskStatus(StrEnum):
    """Workflow state of a task.

    Any state may follow any other; transition rules are not enforced here.
    """

    TODO = "todo"
    IN_PROGRESS = "inprogress"
    IN_REVIEW = "inreview"
    DONE = "done"
    CANCELLED = "cancelled"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskVisibility(StrEnum):
    """Who can see a task inside its workspace."""

    WORKSPACE = "workspace"
    PRIVATE = "private"
    RESTRICTED = "restricted"
