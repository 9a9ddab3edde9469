"""Payload contracts built on pydantic models.

A ``Contract`` wraps a model and reports *all* violations as a list of
``FieldIssue`` instead of raising on the first one. Field rules are plain
callables plugged into ``Annotated`` types so that messages read the way they
are shown to users ("Name is required", not pydantic's defaults).
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, BeforeValidator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails, PydanticCustomError

from tasktrack.errors import FieldIssue, ValidationError

UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


@dataclass(frozen=True, slots=True)
class Text:
    """Trim a string, then enforce inclusive length bounds and an optional pattern."""

    label: str
    max_length: int
    min_length: int = 0
    pattern: re.Pattern[str] | None = None
    pattern_message: str | None = None
    trim: bool = True

    def __call__(self, value: str) -> str:
        if self.trim:
            value = value.strip()
        if len(value) < self.min_length:
            if self.min_length == 1:
                raise PydanticCustomError("string_too_short", "{label} is required", {"label": self.label})
            raise PydanticCustomError(
                "string_too_short",
                "{label} must be at least {min_length} characters",
                {"label": self.label, "min_length": self.min_length},
            )
        if len(value) > self.max_length:
            raise PydanticCustomError(
                "string_too_long",
                "{label} must be at most {max_length} characters",
                {"label": self.label, "max_length": self.max_length},
            )
        if self.pattern is not None and not self.pattern.fullmatch(value):
            message = self.pattern_message or f"{self.label} has an invalid format"
            raise PydanticCustomError("string_pattern_mismatch", message)
        return value


@dataclass(frozen=True, slots=True)
class UuidString:
    """Accept only canonical 8-4-4-4-12 UUID strings; the field type does the conversion."""

    message: str = "Invalid UUID"

    def __call__(self, value: Any) -> Any:
        if isinstance(value, UUID):
            return value
        if not isinstance(value, str) or not UUID_RE.fullmatch(value):
            raise PydanticCustomError("uuid_parsing", self.message)
        return UUID(value)


def _parse_iso_datetime(value: Any) -> Any:
    # Timezone-qualified ISO-8601 only; bare dates and unix numbers are rejected.
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or "T" not in value:
        raise PydanticCustomError("datetime_format", "Invalid datetime")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("datetime_format", "Invalid datetime") from None
    if parsed.tzinfo is None:
        raise PydanticCustomError("datetime_format", "Invalid datetime")
    return parsed


def _reject_null(value: Any) -> Any:
    if value is None:
        raise PydanticCustomError("null_not_allowed", "Field cannot be null")
    return value


IsoDateTime = BeforeValidator(_parse_iso_datetime)
NotNull = BeforeValidator(_reject_null)  # optional on update, but an explicit null is rejected


@dataclass(frozen=True, slots=True)
class Valid[M: BaseModel]:
    """Successful validation; ``value`` is the parsed model."""

    value: M
    ok: Literal[True] = True

    @property
    def data(self) -> dict[str, Any]:
        return to_payload(self.value)


@dataclass(frozen=True, slots=True)
class Invalid:
    """Failed validation with every violation found."""

    issues: list[FieldIssue]
    ok: Literal[False] = False


type ValidationResult[M: BaseModel] = Valid[M] | Invalid


def to_payload(model: BaseModel) -> dict[str, Any]:
    """Dump a parsed model as a JSON-ready dict.

    Defaults are kept, explicit nulls are kept, and fields that were absent
    and default to None are left out so updates can tell "unchanged" from "clear".
    """
    omitted = {
        name
        for name, info in type(model).model_fields.items()
        if name not in model.model_fields_set and info.default is None
    }
    return model.model_dump(mode="json", exclude=omitted)


def issues_from_errors(errors: Iterable[ErrorDetails], skip_prefix: tuple[str, ...] = ()) -> list[FieldIssue]:
    """Convert pydantic error details to field issues.

    ``skip_prefix`` drops leading location parts such as FastAPI's "body".
    """
    issues = []
    for error in errors:
        loc = list(error["loc"])
        if loc and loc[0] in skip_prefix:
            loc = loc[1:]
        issues.append(FieldIssue(path=".".join(str(part) for part in loc), message=error["msg"]))
    return issues


class Contract[M: BaseModel]:
    """Validation entry point for one payload shape."""

    def __init__(self, model: type[M]) -> None:
        self.model = model

    def validate(self, payload: Any) -> ValidationResult[M]:
        try:
            value = self.model.model_validate(payload)
        except PydanticValidationError as e:
            return Invalid(issues=issues_from_errors(e.errors()))
        return Valid(value=value)

    def parse(self, payload: Any) -> M:
        """Like ``validate`` but raises ``ValidationError`` carrying the issues."""
        result = self.validate(payload)
        if isinstance(result, Invalid):
            raise ValidationError("Validation failed", result.issues)
        return result.value

    def __repr__(self) -> str:
        return f"Contract({self.model.__name__})"
