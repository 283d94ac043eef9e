import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from response_service.api.schemas import ErrorDetail
from response_service.core.exceptions import (
    StorageError,
    SubmissionValidationError,
)

logger = logging.getLogger(__name__)


class QuestionnaireMismatchError(Exception):
    def __init__(self, path_id: str, body_id: str) -> None:
        self.path_id = path_id
        self.body_id = body_id
        super().__init__(
            f"Questionnaire id in path ({path_id}) does not match body ({body_id})"
        )


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


def _error_response(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    detail = ErrorDetail(
        code=code,
        message=message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=detail.model_dump())


async def submission_validation_handler(
    request: Request, exc: SubmissionValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def validation_error_handler(
    request: Request, exc: ValidationError | RequestValidationError
) -> JSONResponse:
    return _error_response(request, 422, "VALIDATION_ERROR", str(exc))


async def questionnaire_mismatch_handler(
    request: Request, exc: QuestionnaireMismatchError
) -> JSONResponse:
    return _error_response(request, 422, "QUESTIONNAIRE_ID_MISMATCH", str(exc))


async def storage_error_handler(
    request: Request, exc: StorageError
) -> JSONResponse:
    logger.error(f"Storage failure: {exc}")
    return _error_response(request, 503, "STORAGE_ERROR", str(exc))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _error_response(
        request, 500, "INTERNAL_ERROR", "Internal server error"
    )
