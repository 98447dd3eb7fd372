from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .models import TaskStatus

# Shared type for incoming dueDate which can be a date, datetime, or ISO8601 string
DueDateInput = Union[date, datetime, str]


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[date]:
    """
    Internal helper to normalize dueDate input into a date.
    - If value is a string, accept an ISO date or an ISO datetime (truncated to its date).
    - If value is a datetime, drop the time component.
    - If value is a date, return as-is.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        try:
            return date.fromisoformat(s)
        except ValueError:
            try:
                return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
            except ValueError as e:
                raise ValueError(
                    "Invalid dueDate format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00')."
                ) from e

    raise ValueError("Invalid type for dueDate; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class TaskInput(BaseModel):
    """
    Input accepted by createTask and updateTask.
    All fields are optional; on update only provided fields are merged.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Write tests",
                "description": "Cover the dispatcher branches",
                "status": "IN_PROGRESS",
                "dueDate": "2024-02-01",
            }
        },
    )

    title: Optional[str] = Field(default=None, description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: Optional[TaskStatus] = Field(default=None, description="TODO, IN_PROGRESS or DONE")
    due_date: Optional[date] = Field(
        default=None,
        description="Due date of the task. Accepts ISO8601 date or datetime; datetimes are truncated to the date",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        """
        Normalize dueDate from str/date/datetime to date.
        """
        return _parse_due_date(v)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Wire representation of a task. Serialize with ``by_alias=True`` and
    ``exclude_none=True`` so unset optional fields are omitted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5",
                "title": "Write tests",
                "status": "TODO",
                "dueDate": "2024-02-01",
                "createdAt": "2024-01-13T08:00:00Z",
                "updatedAt": "2024-01-13T08:00:00Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: TaskStatus = Field(..., description="Workflow state")
    due_date: Optional[date] = Field(default=None, description="Due date as YYYY-MM-DD")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


# PUBLIC_INTERFACE
class OperationRequest(BaseModel):
    """
    Body of a POST to the query endpoint.

    Any JSON value except null is accepted. Keys other than query/variables
    are ignored, and a non-object body carries neither, so a wrong-typed
    query or variables is left for the dispatcher to reject.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "mutation CreateTask($input: TaskInput!) { createTask(input: $input) { id title } }",
                "variables": {"input": {"title": "Write tests"}},
            }
        }
    )

    query: Any = Field(default=None, description="Operation descriptor, matched by keyword")
    variables: Any = Field(default=None, description="Operation arguments")

    @model_validator(mode="before")
    @classmethod
    def destructure_body(cls, value: Any) -> Any:
        """
        Read query/variables off objects only; any other JSON value has neither.
        """
        if isinstance(value, dict):
            return value
        return {}


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """
    A single error entry of the response envelope.
    """

    message: str = Field(..., description="Human-readable error message")


# PUBLIC_INTERFACE
class OperationResponse(BaseModel):
    """
    Envelope returned by the query endpoint: exactly one of data/errors is present.
    """

    data: Optional[Dict[str, Any]] = Field(default=None, description="Operation name mapped to its result")
    errors: Optional[List[ErrorOut]] = Field(default=None, description="Error messages")
