from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from .models import TaskEntity
from .schemas import TaskOut


# PUBLIC_INTERFACE
def serialize_task(entity: Optional[TaskEntity]) -> Optional[Dict[str, Any]]:
    """
    Convert a stored task into its JSON-ready wire form (camelCase keys,
    unset optional fields omitted). ``None`` passes through.
    """
    if entity is None:
        return None
    return TaskOut.model_validate(entity).model_dump(mode="json", by_alias=True, exclude_none=True)


def serialize_tasks(entities: Iterable[TaskEntity]) -> List[Dict[str, Any]]:
    return [serialize_task(e) for e in entities]  # type: ignore[misc]


# PUBLIC_INTERFACE
def data_envelope(operation: str, result: Union[Dict[str, Any], List[Any], bool, None]) -> Dict[str, Any]:
    """
    Build a success envelope: ``{"data": {operation: result}}``.
    """
    return {"data": {operation: result}}


# PUBLIC_INTERFACE
def error_envelope(*messages: str) -> Dict[str, Any]:
    """
    Build an error envelope: ``{"errors": [{"message": ...}, ...]}``.
    """
    return {"errors": [{"message": m} for m in messages]}
