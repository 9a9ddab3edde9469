"""Tests for task contracts."""

from datetime import datetime
from uuid import UUID

import pytest

from tasktrack.core.contracts import Invalid, Valid
from tasktrack.core.modules.task.models import TaskPriority, TaskStatus, TaskVisibility
from tasktrack.core.modules.task.validators import (
    assign_task_schema,
    create_task_schema,
    task_filters_schema,
    update_task_schema,
)
from tasktrack.errors import FieldIssue

PROJECT_ID = "12345678-1234-5678-1234-567812345678"
USER_ID = "87654321-4321-8765-4321-876543218765"


class TestCreateTask:
    def test_malformed_project_id(self):
        result = create_task_schema.validate({"project_id": "not-a-uuid", "title": "x"})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("project_id", "Invalid project ID")]

    def test_defaults_applied(self):
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "Fix bug"})
        assert isinstance(result, Valid)
        assert result.data == {
            "project_id": PROJECT_ID,
            "title": "Fix bug",
            "priority": "medium",
            "visibility": "workspace",
        }
        assert result.value.project_id == UUID(PROJECT_ID)
        assert result.value.priority is TaskPriority.MEDIUM
        assert result.value.visibility is TaskVisibility.WORKSPACE

    def test_all_fields(self):
        result = create_task_schema.validate(
            {
                "project_id": PROJECT_ID,
                "title": "Ship it",
                "description": "Before Friday",
                "priority": "urgent",
                "visibility": "private",
                "due_date": "2025-06-01T17:00:00+02:00",
                "assigned_to_user_id": USER_ID,
            }
        )
        assert isinstance(result, Valid)
        assert result.value.due_date == datetime.fromisoformat("2025-06-01T17:00:00+02:00")
        assert result.value.assigned_to_user_id == UUID(USER_ID)

    def test_missing_required_fields(self):
        result = create_task_schema.validate({})
        assert isinstance(result, Invalid)
        assert sorted(issue.path for issue in result.issues) == ["project_id", "title"]

    def test_title_upper_bound(self):
        assert create_task_schema.validate({"project_id": PROJECT_ID, "title": "t" * 500}).ok
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "t" * 501})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("title", "Title must be at most 500 characters")]

    def test_description_upper_bound(self):
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "x", "description": "d" * 10001})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("description", "Description must be at most 10000 characters")]

    @pytest.mark.parametrize("value", ["2025-06-01", "tomorrow", "2025-06-01T17:00:00", 1717254000])
    def test_due_date_must_be_iso_datetime(self, value):
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "x", "due_date": value})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("due_date", "Invalid datetime")]

    def test_malformed_assignee(self):
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "x", "assigned_to_user_id": "42"})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("assigned_to_user_id", "Invalid user ID")]

    def test_unknown_priority(self):
        result = create_task_schema.validate({"project_id": PROJECT_ID, "title": "x", "priority": "critical"})
        assert isinstance(result, Invalid)
        assert [issue.path for issue in result.issues] == ["priority"]


class TestUpdateTask:
    def test_no_defaults_on_update(self):
        result = update_task_schema.validate({"title": "Renamed"})
        assert isinstance(result, Valid)
        assert result.data == {"title": "Renamed"}

    @pytest.mark.parametrize("status", list(TaskStatus))
    def test_any_status_accepted(self, status):
        result = update_task_schema.validate({"status": status.value})
        assert isinstance(result, Valid)
        assert result.value.status is status

    def test_nullable_fields_clear(self):
        result = update_task_schema.validate({"description": None, "due_date": None})
        assert isinstance(result, Valid)
        assert result.data == {"description": None, "due_date": None}

    @pytest.mark.parametrize("field", ["title", "status", "priority", "visibility"])
    def test_null_rejected_on_required_fields(self, field):
        result = update_task_schema.validate({field: None})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue(field, "Field cannot be null")]

    def test_empty_title_fails(self):
        result = update_task_schema.validate({"title": ""})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("title", "Title is required")]


class TestAssignTask:
    def test_assign(self):
        result = assign_task_schema.validate({"user_id": USER_ID})
        assert isinstance(result, Valid)
        assert result.value.user_id == UUID(USER_ID)

    def test_null_unassigns(self):
        result = assign_task_schema.validate({"user_id": None})
        assert isinstance(result, Valid)
        assert result.data == {"user_id": None}

    def test_user_id_required(self):
        result = assign_task_schema.validate({})
        assert isinstance(result, Invalid)
        assert [issue.path for issue in result.issues] == ["user_id"]

    def test_malformed_user_id(self):
        result = assign_task_schema.validate({"user_id": "nope"})
        assert isinstance(result, Invalid)
        assert result.issues == [FieldIssue("user_id", "Invalid user ID")]


class TestTaskFilters:
    def test_defaults(self):
        result = task_filters_schema.validate({})
        assert isinstance(result, Valid)
        assert result.data == {"page": 1, "limit": 50}

    def test_limit_over_max(self):
        result = task_filters_schema.validate({"limit": 500})
        assert isinstance(result, Invalid)
        assert [issue.path for issue in result.issues] == ["limit"]

    @pytest.mark.parametrize("payload", [{"page": 0}, {"limit": 0}])
    def test_lower_bounds(self, payload):
        assert isinstance(task_filters_schema.validate(payload), Invalid)

    def test_query_strings_coerced(self):
        result = task_filters_schema.validate({"page": "3", "limit": "100", "status": "done", "project_id": PROJECT_ID})
        assert isinstance(result, Valid)
        assert result.value.page == 3
        assert result.value.limit == 100
        assert result.value.status is TaskStatus.DONE
        assert result.value.project_id == UUID(PROJECT_ID)
