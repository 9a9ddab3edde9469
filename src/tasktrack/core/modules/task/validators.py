"""Task payload contracts, including assignment and list filters."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from tasktrack.core.contracts import Contract, IsoDateTime, NotNull, Text, UuidString
from tasktrack.core.modules.task.models import TaskPriority, TaskStatus, TaskVisibility

TaskTitle = Annotated[str, AfterValidator(Text("Title", min_length=1, max_length=500))]
TaskDescription = Annotated[str, AfterValidator(Text("Description", max_length=10000))]
DueDate = Annotated[datetime, IsoDateTime]
ProjectId = Annotated[UUID, BeforeValidator(UuidString("Invalid project ID"))]
UserId = Annotated[UUID, BeforeValidator(UuidString("Invalid user ID"))]


class CreateTask(BaseModel):
    project_id: ProjectId
    title: TaskTitle
    description: Annotated[TaskDescription | None, NotNull] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    visibility: TaskVisibility = TaskVisibility.WORKSPACE
    due_date: Annotated[DueDate | None, NotNull] = None
    assigned_to_user_id: Annotated[UserId | None, NotNull] = None


class UpdateTask(BaseModel):
    title: Annotated[TaskTitle | None, NotNull] = None
    description: TaskDescription | None = None
    status: Annotated[TaskStatus | None, NotNull] = None
    priority: Annotated[TaskPriority | None, NotNull] = None
    visibility: Annotated[TaskVisibility | None, NotNull] = None
    due_date: DueDate | None = None


class AssignTask(BaseModel):
    user_id: UserId | None  # required; null unassigns


class TaskFilters(BaseModel):
    project_id: Annotated[UUID, BeforeValidator(UuidString())] | None = None
    status: TaskStatus | None = None
    assigned_to: Annotated[UUID, BeforeValidator(UuidString())] | None = None
    priority: TaskPriority | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=100)


create_task_schema = Contract(CreateTask)
update_task_schema = Contract(UpdateTask)
assign_task_schema = Contract(AssignTask)
task_filters_schema = Contract(TaskFilters)
