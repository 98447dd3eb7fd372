from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .dispatcher import TaskDispatcher
from .repositories import TaskRepository, get_repository
from .routers import graphql as graphql_router
from .settings import Settings, get_settings
from .utils import error_envelope

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request"

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "Keyword-dispatched query and mutation endpoint for tasks.",
    },
]


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[TaskRepository] = None,
) -> FastAPI:
    """
    Build the FastAPI application around a task repository.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        repository: Store to serve; a fresh in-memory store (seeded unless
            SEED_EXAMPLE_TASKS is false) when omitted.
    """
    settings = settings or get_settings()
    if repository is None:
        repository = get_repository(seed=settings.seed_example_tasks)

    app = FastAPI(
        title="Task Tracker",
        description="In-memory task tracking backend with a keyword-dispatched query endpoint.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.repository = repository
    app.state.dispatcher = TaskDispatcher(repository)

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Unparseable bodies (invalid JSON, null or empty) get a 400 error envelope:

            {"errors": [{"message": "Invalid request"}]}
        """
        logger.info("Rejected unparseable request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=error_envelope(INVALID_REQUEST))

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the current task count.
        """
        return {"message": "Healthy", "tasks": len(app.state.repository.list_all())}

    app.include_router(graphql_router.router)
    return app


app = create_app()
