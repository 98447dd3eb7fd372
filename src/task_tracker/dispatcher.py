from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .repositories import TaskRepository
from .schemas import TaskInput
from .utils import data_envelope, error_envelope, serialize_task, serialize_tasks

logger = logging.getLogger(__name__)

UNKNOWN_QUERY = "Unknown query"
EXECUTION_FAILED = "Query execution failed"


# PUBLIC_INTERFACE
class Operation(str, Enum):
    """Operations understood by the dispatcher. The value is the result key in the data envelope."""

    TASKS = "tasks"
    TASK = "task"
    TASKS_BY_STATUS = "tasksByStatus"
    CREATE_TASK = "createTask"
    UPDATE_TASK = "updateTask"
    DELETE_TASK = "deleteTask"


# Checked in order, first hit wins. Queries come before mutations and
# "tasksByStatus" / "task(" before the bare "tasks" they overlap with.
CLASSIFICATION_ORDER: Tuple[Tuple[str, Operation], ...] = (
    ("tasksByStatus", Operation.TASKS_BY_STATUS),
    ("task(", Operation.TASK),
    ("tasks", Operation.TASKS),
    ("createTask", Operation.CREATE_TASK),
    ("updateTask", Operation.UPDATE_TASK),
    ("deleteTask", Operation.DELETE_TASK),
)


# PUBLIC_INTERFACE
def classify(descriptor: str) -> Optional[Operation]:
    """
    Map an operation descriptor to an Operation by keyword presence.

    Returns None when no keyword occurs. Raises TypeError for non-string
    descriptors.
    """
    if not isinstance(descriptor, str):
        raise TypeError(f"operation descriptor must be a string, got {type(descriptor).__name__}")
    for keyword, operation in CLASSIFICATION_ORDER:
        if keyword in descriptor:
            return operation
    return None


# PUBLIC_INTERFACE
class TaskDispatcher:
    """
    Executes operation requests against a TaskRepository and wraps the
    outcome in a ``{"data": ...}`` or ``{"errors": [...]}`` envelope.

    Not-found results are successes carrying ``None`` (task, updateTask)
    or ``False`` (deleteTask). No exception escapes ``execute``/``run``.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository
        self._handlers: Dict[Operation, Callable[[Mapping[str, Any]], Any]] = {
            Operation.TASKS: self._tasks,
            Operation.TASK: self._task,
            Operation.TASKS_BY_STATUS: self._tasks_by_status,
            Operation.CREATE_TASK: self._create_task,
            Operation.UPDATE_TASK: self._update_task,
            Operation.DELETE_TASK: self._delete_task,
        }

    def execute(self, query: Any, variables: Any = None) -> Dict[str, Any]:
        """Classify a free-text descriptor and run the matching operation."""
        try:
            operation = classify(query)
        except Exception:
            logger.exception("Failed to classify operation descriptor")
            return error_envelope(EXECUTION_FAILED)

        if operation is None:
            logger.warning("Unknown operation descriptor: %.80r", query)
            return error_envelope(UNKNOWN_QUERY)
        return self.run(operation, variables)

    def run(self, operation: Operation, variables: Any = None) -> Dict[str, Any]:
        """
        Run an already-identified operation. Variables that are not a mapping
        carry no arguments.
        """
        if not isinstance(variables, Mapping):
            variables = {}
        try:
            result = self._handlers[Operation(operation)](variables)
        except Exception:
            logger.exception("Operation %s failed", operation)
            return error_envelope(EXECUTION_FAILED)
        logger.info("Executed %s", Operation(operation).value)
        return data_envelope(Operation(operation).value, result)

    def _tasks(self, variables: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return serialize_tasks(self._repo.list_all())

    def _task(self, variables: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return serialize_task(self._repo.get_by_id(variables.get("id")))

    def _tasks_by_status(self, variables: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return serialize_tasks(self._repo.list_by_status(variables.get("status")))

    def _create_task(self, variables: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        data = TaskInput.model_validate(variables.get("input"))
        return serialize_task(self._repo.create(data))

    def _update_task(self, variables: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        # a missing input only refreshes updatedAt
        raw = variables.get("input")
        data = TaskInput() if raw is None else TaskInput.model_validate(raw)
        return serialize_task(self._repo.update(variables.get("id"), data))

    def _delete_task(self, variables: Mapping[str, Any]) -> bool:
        return self._repo.delete(variables.get("id"))
