"""
Code explanation API endpoint.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from models.explanation import ExplainRequest, ExplanationResult, ErrorResponse
from services.explainer.client import ExplanationServiceClient
from services.explainer.validator import validate_explain_request
from services.history.recorder import HistoryRecorder

router = APIRouter(prefix="/api", tags=["explain"])


def get_explainer(request: Request) -> ExplanationServiceClient:
    return request.app.state.explainer


def get_history_recorder(request: Request) -> HistoryRecorder:
    return request.app.state.history_recorder


@router.post(
    "/explain-code",
    response_model=ExplanationResult,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid code or language"},
        500: {"model": ErrorResponse, "description": "Analysis failed"},
        503: {"model": ErrorResponse, "description": "AI service unavailable"},
    },
)
async def explain_code(
    request: ExplainRequest,
    background_tasks: BackgroundTasks,
    explainer: ExplanationServiceClient = Depends(get_explainer),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """
    Explain a code snippet.

    Flow:
    1. Validate input (no provider call on failure)
    2. Call the model and normalize its JSON answer
    3. Queue the history record (runs after the response is sent)
    4. Return the result, responseTime in seconds

    Errors are turned into {error} bodies by api/errors.py.
    """
    validate_explain_request(request)

    result = await explainer.explain(request.code, request.language)

    background_tasks.add_task(recorder.record, request, result)

    return result
