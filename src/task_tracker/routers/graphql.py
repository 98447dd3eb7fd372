from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..dispatcher import TaskDispatcher
from ..schemas import OperationRequest, OperationResponse

router = APIRouter(
    prefix="/api",
    tags=["tasks"],
)


def _get_dispatcher(request: Request) -> TaskDispatcher:
    """
    Dependency returning the dispatcher bound to the application's store.
    """
    return request.app.state.dispatcher


# PUBLIC_INTERFACE
@router.post(
    "/graphql",
    response_model=OperationResponse,
    summary="Execute Operation",
    description=(
        "Execute a task operation selected by keyword in the `query` string.\n\n"
        "Keywords, checked in this order:\n"
        "- tasksByStatus: variables.status -> tasks with that status\n"
        "- task( : variables.id -> single task or null\n"
        "- tasks: all tasks, newest first\n"
        "- createTask: variables.input -> created task\n"
        "- updateTask: variables.id, variables.input -> updated task or null\n"
        "- deleteTask: variables.id -> boolean\n\n"
        "Business errors are returned with status 200 in an `errors` envelope."
    ),
    responses={
        200: {"description": "Operation result or error envelope"},
        400: {"description": "Unparseable request body"},
    },
)
def execute_operation(
    payload: OperationRequest, dispatcher: TaskDispatcher = Depends(_get_dispatcher)
) -> JSONResponse:
    """
    Run the operation named by the request's descriptor.
    """
    result = dispatcher.execute(payload.query, payload.variables)
    return JSONResponse(content=result)
