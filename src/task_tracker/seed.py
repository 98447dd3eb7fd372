"""
Example tasks loaded into the store at startup.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List

from .models import TaskEntity, TaskStatus


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


# PUBLIC_INTERFACE
def example_tasks() -> List[TaskEntity]:
    """Return a fresh list of the four example tasks (ids "1".."4")."""
    return [
        {
            "id": "1",
            "title": "Setup project repository",
            "description": "Initialize the Git repository and setup the basic project structure",
            "status": TaskStatus.DONE,
            "due_date": date(2024, 1, 15),
            "created_at": _ts("2024-01-10T10:00:00"),
            "updated_at": _ts("2024-01-12T14:30:00"),
        },
        {
            "id": "2",
            "title": "Design database schema",
            "description": "Create the database schema for the task management system",
            "status": TaskStatus.IN_PROGRESS,
            "due_date": date(2024, 1, 20),
            "created_at": _ts("2024-01-12T09:00:00"),
            "updated_at": _ts("2024-01-12T09:00:00"),
        },
        {
            "id": "3",
            "title": "Implement user authentication",
            "description": "Add user registration, login, and session management",
            "status": TaskStatus.TODO,
            "due_date": date(2024, 1, 25),
            "created_at": _ts("2024-01-12T11:00:00"),
            "updated_at": _ts("2024-01-12T11:00:00"),
        },
        {
            "id": "4",
            "title": "Create task CRUD operations",
            "description": "Implement create, read, update, and delete operations for tasks",
            "status": TaskStatus.TODO,
            "due_date": None,
            "created_at": _ts("2024-01-12T12:00:00"),
            "updated_at": _ts("2024-01-12T12:00:00"),
        },
    ]
