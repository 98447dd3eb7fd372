from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """Workflow state of a task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    Storage-level representation of a task held by the in-memory store.

    Fields:
    - id: Unique string identifier, assigned by the store
    - title: Task title (may be empty)
    - description: Optional detailed description
    - status: One of TaskStatus
    - due_date: Optional due date
    - created_at: UTC creation timestamp, never changed afterwards
    - updated_at: UTC timestamp of the last mutation
    """

    id: str
    title: str
    description: Optional[str]
    status: TaskStatus
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime
