"""Operator session endpoints."""

from fastapi import APIRouter, Depends

from idistr.api.dependencies import (
    get_host_context,
    get_operator_id,
    get_query_params,
    get_registry,
    get_start_session_use_case,
)
from idistr.application.dto.responses import ErrorResponse, ResetResponse, SessionResponse
from idistr.application.session import SessionRegistry
from idistr.application.use_cases import StartSessionUseCase
from idistr.core.services import HostContext

router = APIRouter(prefix="/api/session", tags=["session"])


@router.post(
    "",
    response_model=SessionResponse,
    responses={
        401: {"model": ErrorResponse, "description": "No operator identity"},
        404: {"model": ErrorResponse, "description": "Operator is not a registered rep"},
        502: {"model": ErrorResponse, "description": "Backend failure"},
    },
)
async def start_session(
    host_context: HostContext = Depends(get_host_context),
    query_params: dict[str, str | None] = Depends(get_query_params),
    use_case: StartSessionUseCase = Depends(get_start_session_use_case),
) -> SessionResponse:
    """
    Start (or restart) the operator's session.

    Loads the rep, their stores and the catalog, then rehydrates and
    reconciles the persisted cart.
    """
    result = await use_case.execute(host_context, query_params)
    return use_case.to_response(result)


@router.post("/reset", response_model=ResetResponse)
async def reset_session(
    operator_id: str = Depends(get_operator_id),
    registry: SessionRegistry = Depends(get_registry),
) -> ResetResponse:
    """Wipe the operator's persisted cart, recents and store selection."""
    await registry.reset(operator_id)
    return ResetResponse(operator_id=operator_id)
