import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from response_service.api.config import ServiceSettings
from response_service.api.dependencies import get_settings, init_service
from response_service.api.errors import (
    QuestionnaireMismatchError,
    questionnaire_mismatch_handler,
    storage_error_handler,
    submission_validation_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from response_service.api.routes import router
from response_service.core.exceptions import (
    StorageError,
    SubmissionValidationError,
)

logger = logging.getLogger(__name__)


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Quiz Response Service")
    app.state.settings = settings
    init_service(settings)
    if settings.storage_backend == "file":
        logger.info(f"Response service storing data in {settings.data_dir}")
    else:
        logger.info("Response service using in-memory storage")

    # Exception handlers; cast needed because FastAPI expects
    # (Request, Exception) but our handlers use specific exc types.
    _eh = cast(ExceptionHandler, submission_validation_handler)
    app.add_exception_handler(SubmissionValidationError, _eh)
    _eh = cast(ExceptionHandler, questionnaire_mismatch_handler)
    app.add_exception_handler(QuestionnaireMismatchError, _eh)
    _eh = cast(ExceptionHandler, storage_error_handler)
    app.add_exception_handler(StorageError, _eh)
    _eh = cast(ExceptionHandler, validation_error_handler)
    app.add_exception_handler(ValidationError, _eh)
    app.add_exception_handler(RequestValidationError, _eh)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
