"""
Dependency injection container for FastAPI.

Provides sessions, use cases and infrastructure to route handlers.
Tests swap any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends, Header, Query

from idistr.application.services import get_session_registry
from idistr.application.session import PosSession, SessionRegistry
from idistr.application.use_cases import (
    ManageCartUseCase,
    StartSessionUseCase,
    SubmitOrderUseCase,
)
from idistr.core.exceptions import IdentityMissingError
from idistr.core.interfaces import IOrderGateway
from idistr.core.services import HostContext, OperatorResolver, ReceiptGenerator
from idistr.core.services.operator_resolver import QUERY_PARAM
from idistr.infrastructure.gateway import get_order_gateway
from idistr.infrastructure.receipts import (
    ReceiptOutbox,
    get_print_surface,
    get_receipt_outbox,
    get_receipt_renderer,
)


# Infrastructure dependencies
def get_gateway() -> IOrderGateway:
    """Get backend gateway."""
    return get_order_gateway()


def get_registry() -> SessionRegistry:
    """Get operator session registry."""
    return get_session_registry()


def get_outbox() -> ReceiptOutbox:
    """Get issued receipts outbox."""
    return get_receipt_outbox()


def get_receipt_generator() -> ReceiptGenerator:
    """Get receipt generator for the configured format and surface."""
    return ReceiptGenerator(get_receipt_renderer(), get_print_surface())


# Operator identity
def get_host_context(
    x_telegram_init_data: str | None = Header(default=None),
) -> HostContext:
    """Launch context relayed by the mini-app client."""
    return HostContext.from_init_data(x_telegram_init_data)


def get_query_params(
    tid: str | None = Query(default=None, description="Operator Telegram ID"),
) -> dict[str, str | None]:
    return {QUERY_PARAM: tid}


def get_operator_id(
    host_context: HostContext = Depends(get_host_context),
    query_params: dict[str, str | None] = Depends(get_query_params),
) -> str:
    """Resolved operator id; absence is an IdentityMissingError."""
    operator_id = OperatorResolver().resolve(host_context, query_params)
    if not operator_id:
        raise IdentityMissingError()
    return operator_id


def get_session(
    operator_id: str = Depends(get_operator_id),
    registry: SessionRegistry = Depends(get_registry),
) -> PosSession:
    """Started session of the requesting operator."""
    return registry.get(operator_id)


# Use case dependencies
def get_start_session_use_case(
    gateway: IOrderGateway = Depends(get_gateway),
    registry: SessionRegistry = Depends(get_registry),
) -> StartSessionUseCase:
    """Get start session use case."""
    return StartSessionUseCase(gateway=gateway, registry=registry)


def get_submit_order_use_case(
    gateway: IOrderGateway = Depends(get_gateway),
    receipt_generator: ReceiptGenerator = Depends(get_receipt_generator),
) -> SubmitOrderUseCase:
    """Get submit order use case."""
    return SubmitOrderUseCase(gateway=gateway, receipt_generator=receipt_generator)


def get_manage_cart_use_case(
    session: PosSession = Depends(get_session),
) -> ManageCartUseCase:
    """Get cart use case bound to the operator's session."""
    return ManageCartUseCase(session)
