from fastapi import APIRouter, Depends

from response_service.analytics.data_models import LeaderboardEntry, ResponseStats
from response_service.api.dependencies import get_service, get_version
from response_service.api.errors import QuestionnaireMismatchError
from response_service.api.schemas import HealthResponse, SubmitResponseRequest
from response_service.core.data_models import Questionnaire, ResponseRecord
from response_service.service import ResponseService

router = APIRouter(prefix="/api/v1")


@router.post("/responses", status_code=201)
async def submit_response(
    request: SubmitResponseRequest,
    service: ResponseService = Depends(get_service),
) -> ResponseRecord:
    return await service.submit_response(
        request.questionnaire_id,
        request.responses,
        request.submitted_at,
        submitter=request.to_submitter(),
    )


@router.get("/responses")
async def list_responses(
    service: ResponseService = Depends(get_service),
) -> list[ResponseRecord]:
    return await service.get_all_responses()


@router.get("/questionnaires/{questionnaire_id}/responses")
async def list_questionnaire_responses(
    questionnaire_id: str,
    service: ResponseService = Depends(get_service),
) -> list[ResponseRecord]:
    return await service.get_responses_by_questionnaire(questionnaire_id)


@router.get("/questionnaires/{questionnaire_id}/stats")
async def get_response_stats(
    questionnaire_id: str,
    service: ResponseService = Depends(get_service),
) -> ResponseStats:
    return await service.get_response_stats(questionnaire_id)


@router.get("/questionnaires/{questionnaire_id}/leaderboard")
async def get_leaderboard(
    questionnaire_id: str,
    service: ResponseService = Depends(get_service),
) -> list[LeaderboardEntry]:
    return await service.get_leaderboard(questionnaire_id)


@router.put("/questionnaires/{questionnaire_id}")
async def put_questionnaire(
    questionnaire_id: str,
    questionnaire: Questionnaire,
    service: ResponseService = Depends(get_service),
) -> Questionnaire:
    if questionnaire.id != questionnaire_id:
        raise QuestionnaireMismatchError(questionnaire_id, questionnaire.id)
    await service.save_questionnaire(questionnaire)
    return questionnaire


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)
