"""
Operator resolver.

Determines the acting sales rep from, in order:
1. the user id embedded in the host runtime's launch context
   (Telegram WebApp init data),
2. a ``tid`` query parameter on the page URL,
3. nothing: absence is a normal outcome surfaced to the operator.

The init data is relayed as-is; its signature is not verified.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from idistr.config import get_logger
from idistr.core.entities import canonical_id

logger = get_logger(__name__)

QUERY_PARAM = "tid"


@dataclass(frozen=True)
class HostContext:
    """Launch context supplied by the hosting chat runtime."""

    user: Mapping[str, Any] | None = None
    raw: str = ""

    @classmethod
    def from_init_data(cls, init_data: str | None) -> "HostContext":
        """
        Parse the URL-encoded init data string.

        The ``user`` field holds a JSON object. Malformed data gives an
        empty context instead of an error.
        """
        if not init_data:
            return cls()
        try:
            fields = parse_qs(init_data, keep_blank_values=True)
            user_raw = fields.get("user", [""])[0]
            user = json.loads(user_raw) if user_raw else None
        except (ValueError, TypeError):
            logger.warning("host_context_unparseable", length=len(init_data))
            return cls(raw=init_data)
        if not isinstance(user, dict):
            user = None
        return cls(user=user, raw=init_data)

    @property
    def available(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        """The host user id as a canonical string, or None."""
        if not self.user:
            return None
        user_id = canonical_id(self.user.get("id"))
        return user_id or None


class OperatorResolver:
    """Resolves the operator identifier; never raises."""

    def resolve(
        self,
        host_context: HostContext | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> str | None:
        if host_context is not None and host_context.user_id:
            logger.debug("operator_resolved", source="host")
            return host_context.user_id

        if query_params:
            tid = canonical_id(query_params.get(QUERY_PARAM))
            if tid:
                logger.debug("operator_resolved", source="query")
                return tid

        logger.info("operator_unresolved")
        return None
