"""Project payload contracts."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel

from tasktrack.core.contracts import Contract, NotNull, Text
from tasktrack.core.modules.project.models import ProjectStatus

ProjectName = Annotated[str, AfterValidator(Text("Name", min_length=1, max_length=200))]
ProjectDescription = Annotated[str, AfterValidator(Text("Description", max_length=2000))]


class CreateProject(BaseModel):
    name: ProjectName
    description: Annotated[ProjectDescription | None, NotNull] = None


class UpdateProject(BaseModel):
    name: Annotated[ProjectName | None, NotNull] = None
    description: ProjectDescription | None = None  # null clears the description
    status: Annotated[ProjectStatus | None, NotNull] = None


create_project_schema = Contract(CreateProject)
update_project_schema = Contract(UpdateProject)
