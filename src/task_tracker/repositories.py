from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Any, Iterable, List, Optional

from .models import TaskEntity, TaskStatus
from .schemas import TaskInput
from .seed import example_tasks

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TaskRepository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def list_all(self) -> List[TaskEntity]:
        """Return every task, newest first."""

    @abstractmethod
    def get_by_id(self, task_id: Any) -> Optional[TaskEntity]:
        """Return a task by id, or None if not found."""

    @abstractmethod
    def list_by_status(self, status: Any) -> List[TaskEntity]:
        """Return the tasks whose status equals the argument, in collection order; [] when none match."""

    @abstractmethod
    def create(self, data: TaskInput) -> TaskEntity:
        """Create, prepend and return a new task."""

    @abstractmethod
    def update(self, task_id: Any, data: TaskInput) -> Optional[TaskEntity]:
        """Merge provided fields into an existing task. Return it, or None if not found."""

    @abstractmethod
    def delete(self, task_id: Any) -> bool:
        """Delete a task by id. Return True if deleted, False if not found."""


class InMemoryTaskRepository(TaskRepository):
    """
    Thread-safe in-memory repository. Tasks are kept newest first; ids come
    from a counter that is never rewound, so deleted ids are not reused.
    """

    def __init__(self, initial: Iterable[TaskEntity] = ()) -> None:
        self._lock = RLock()
        self._items: List[TaskEntity] = [t.copy() for t in initial]
        numeric = [int(t["id"]) for t in self._items if t["id"].isdigit()]
        self._next_id = max(numeric, default=0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> str:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return str(i)

    def _index_of(self, task_id: Any) -> int:
        if task_id is None:
            return -1
        key = str(task_id)
        for i, t in enumerate(self._items):
            if t["id"] == key:
                return i
        return -1

    def list_all(self) -> List[TaskEntity]:
        with self._lock:
            return [t.copy() for t in self._items]

    def get_by_id(self, task_id: Any) -> Optional[TaskEntity]:
        with self._lock:
            idx = self._index_of(task_id)
            return None if idx < 0 else self._items[idx].copy()

    def list_by_status(self, status: Any) -> List[TaskEntity]:
        # plain equality: an unknown or missing status matches nothing
        with self._lock:
            return [t.copy() for t in self._items if t["status"] == status]

    def create(self, data: TaskInput) -> TaskEntity:
        now = self._now()
        with self._lock:
            entity: TaskEntity = {
                "id": self._allocate_id(),
                "title": data.title or "",
                "description": data.description,
                "status": data.status or TaskStatus.TODO,
                "due_date": data.due_date,
                "created_at": now,
                "updated_at": now,
            }
            self._items.insert(0, entity)
        logger.debug("Created task %s", entity["id"])
        return entity.copy()

    def update(self, task_id: Any, data: TaskInput) -> Optional[TaskEntity]:
        with self._lock:
            idx = self._index_of(task_id)
            if idx < 0:
                return None

            existing = self._items[idx]
            updated = existing.copy()
            if data.title is not None:
                updated["title"] = data.title
            if data.status is not None:
                updated["status"] = data.status
            # description and due_date may be cleared with an explicit null
            if "description" in data.model_fields_set:
                updated["description"] = data.description
            if "due_date" in data.model_fields_set:
                updated["due_date"] = data.due_date
            # updated_at must move forward even when the clock has not ticked
            updated["updated_at"] = max(
                self._now(), existing["updated_at"] + timedelta(microseconds=1)
            )

            self._items[idx] = updated
        logger.debug("Updated task %s fields=%s", updated["id"], sorted(data.model_fields_set))
        return updated.copy()

    def delete(self, task_id: Any) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx < 0:
                return False
            removed = self._items.pop(idx)
        logger.debug("Deleted task %s", removed["id"])
        return True


# PUBLIC_INTERFACE
def get_repository(seed: bool = True) -> TaskRepository:
    """
    Factory returning a fresh in-memory repository, optionally seeded with
    the example tasks.
    """
    return InMemoryTaskRepository(example_tasks() if seed else ())
