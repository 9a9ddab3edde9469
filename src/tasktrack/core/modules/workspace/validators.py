"""Workspace payload contracts."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel

from tasktrack.core.contracts import Contract, NotNull, Text
from tasktrack.utils import SLUG_RE

WorkspaceName = Annotated[str, AfterValidator(Text("Name", min_length=1, max_length=100))]
WorkspaceSlug = Annotated[
    str,
    AfterValidator(
        Text(
            "Slug",
            min_length=1,
            max_length=50,
            pattern=SLUG_RE,
            pattern_message="Slug must contain only lowercase letters, numbers, and hyphens",
        )
    ),
]


class CreateWorkspace(BaseModel):
    name: WorkspaceName
    slug: WorkspaceSlug


class UpdateWorkspace(BaseModel):
    name: Annotated[WorkspaceName | None, NotNull] = None
    slug: Annotated[WorkspaceSlug | None, NotNull] = None


create_workspace_schema = Contract(CreateWorkspace)
update_workspace_schema = Contract(UpdateWorkspace)
