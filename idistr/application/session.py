"""
Operator sessions.

A ``PosSession`` is one operator's working set: the catalog cache, the
cart ledger, the rep record and the order submission state. The
``SessionRegistry`` keeps one session per operator id, each with its own
local state namespace.
"""

from urllib.parse import quote

from idistr.config import get_logger, get_settings
from idistr.core.entities import Rep, SubmissionState
from idistr.core.exceptions import SessionNotStartedError
from idistr.core.interfaces import IStateStore
from idistr.core.services import CartLedger, CatalogCache

logger = get_logger(__name__)


class PosSession:
    """State of one operator between requests."""

    def __init__(
        self,
        operator_id: str,
        ledger: CartLedger,
        catalog: CatalogCache | None = None,
        rep: Rep | None = None,
    ):
        self.operator_id = operator_id
        self.ledger = ledger
        self.catalog = catalog or CatalogCache()
        self.rep = rep
        self.state = SubmissionState.IDLE
        self.last_order_id: str | None = None

    @property
    def submitting(self) -> bool:
        return self.state == SubmissionState.SUBMITTING


class SessionRegistry:
    """In-process registry of operator sessions."""

    def __init__(
        self,
        store: IStateStore | None = None,
        namespace: str | None = None,
        recents_limit: int | None = None,
    ):
        settings = get_settings().state
        self._store = store
        self._namespace = namespace or settings.namespace
        self._recents_limit = recents_limit or settings.recents_limit
        self._sessions: dict[str, PosSession] = {}

    def _get_store(self) -> IStateStore:
        if self._store is None:
            from idistr.infrastructure.storage import get_state_store

            self._store = get_state_store()
        return self._store

    def namespace_for(self, operator_id: str) -> str:
        """
        State namespace of one operator.

        The id is percent-encoded with "." escaped too, so no operator's
        namespace is a key prefix of another's ("1" vs "1.5").
        """
        return f"{self._namespace}.{quote(operator_id, safe='').replace('.', '%2E')}"

    def new_session(self, operator_id: str) -> PosSession:
        """Build an unregistered session; call ``register`` once it is loaded."""
        ledger = CartLedger(
            self._get_store(),
            namespace=self.namespace_for(operator_id),
            recents_limit=self._recents_limit,
        )
        return PosSession(operator_id, ledger)

    def register(self, session: PosSession) -> None:
        self._sessions[session.operator_id] = session
        logger.info("session_registered", operator_id=session.operator_id)

    def find(self, operator_id: str) -> PosSession | None:
        return self._sessions.get(operator_id)

    def get(self, operator_id: str) -> PosSession:
        session = self._sessions.get(operator_id)
        if session is None:
            raise SessionNotStartedError(operator_id)
        return session

    def discard(self, operator_id: str) -> bool:
        return self._sessions.pop(operator_id, None) is not None

    async def reset(self, operator_id: str) -> None:
        """Wipe the operator's persisted state and drop the session."""
        session = self._sessions.pop(operator_id, None)
        ledger = session.ledger if session else self.new_session(operator_id).ledger
        await ledger.reset()

    def __len__(self) -> int:
        return len(self._sessions)
