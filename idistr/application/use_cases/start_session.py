"""Start Session Use Case: resolve the operator, load their catalog, rehydrate the cart."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from idistr.application.dto.responses import RepResponse, SessionResponse, StoreResponse
from idistr.application.session import PosSession, SessionRegistry
from idistr.application.use_cases.manage_cart import cart_to_response
from idistr.config import get_logger
from idistr.core.exceptions import IdentityMissingError
from idistr.core.interfaces import IOrderGateway
from idistr.core.services import HostContext, OperatorResolver, ReconcileReport

logger = get_logger(__name__)


@dataclass
class StartSessionResult:
    """Result of starting a session."""

    session: PosSession
    report: ReconcileReport


class StartSessionUseCase:
    """
    Start (or restart) an operator session.

    Steps:
    1. Resolve the operator id (host context, then ``tid`` query param)
    2. Look up the rep and their stores
    3. Fetch the product catalog
    4. Rehydrate the cart and reconcile it against the catalog

    The session is registered only after every step succeeded, so a
    failed load never leaves a half-populated session behind.
    """

    def __init__(
        self,
        gateway: IOrderGateway | None = None,
        registry: SessionRegistry | None = None,
        resolver: OperatorResolver | None = None,
    ):
        self._gateway = gateway
        self._registry = registry
        self._resolver = resolver or OperatorResolver()

    def _get_gateway(self) -> IOrderGateway:
        if self._gateway is None:
            from idistr.infrastructure.gateway import get_order_gateway

            self._gateway = get_order_gateway()
        return self._gateway

    def _get_registry(self) -> SessionRegistry:
        if self._registry is None:
            from idistr.application.services import get_session_registry

            self._registry = get_session_registry()
        return self._registry

    async def execute(
        self,
        host_context: HostContext | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> StartSessionResult:
        """Execute start session use case."""
        operator_id = self._resolver.resolve(host_context, query_params)
        if not operator_id:
            raise IdentityMissingError()

        logger.info("session_start_started", operator_id=operator_id)
        gateway = self._get_gateway()
        registry = self._get_registry()

        profile = await gateway.get_rep(operator_id)
        products = await gateway.fetch_catalog()

        session = registry.new_session(operator_id)
        session.rep = profile.rep
        session.catalog.populate(profile.stores, products)

        await session.ledger.load()
        report = await session.ledger.reconcile(session.catalog)

        registry.register(session)

        logger.info(
            "session_start_complete",
            operator_id=operator_id,
            stores=len(profile.stores),
            products=len(products),
            cart_lines=len(report.lines),
            repaired=len(report.repaired),
            unresolved=len(report.unresolved),
        )
        return StartSessionResult(session=session, report=report)

    def to_response(self, result: StartSessionResult) -> SessionResponse:
        """Convert result to API response."""
        session = result.session
        rep = None
        if session.rep is not None:
            rep = RepResponse(
                id=session.rep.id,
                name=session.rep.name,
                extra=dict(session.rep.model_extra or {}),
            )
        return SessionResponse(
            operator_id=session.operator_id,
            rep=rep,
            stores=[StoreResponse(**store.model_dump()) for store in session.catalog.stores],
            products_count=len(session.catalog.products),
            categories=session.catalog.categories(),
            cart=cart_to_response(session.ledger),
            repaired_lines=len(result.report.repaired),
            unresolved_lines=len(result.report.unresolved),
        )
