"""Allow-list authorization for bot commands."""

import sys
from typing import FrozenSet, Iterable

from ipbot.domain.errors import NotAuthorized
from ipbot.domain.models import AuthDecision


def _log(msg: str):
    print(msg, file=sys.stderr)


class AuthorizationGate:
    """Decides whether a caller may run a command.

    The allow-list is fixed at construction. Membership is an exact,
    case-sensitive string match. An empty allow-list denies everyone.
    """

    def __init__(self, allowed_users: Iterable[str]):
        self._allowed: FrozenSet[str] = frozenset(allowed_users)

    @property
    def allowed_users(self) -> FrozenSet[str]:
        return self._allowed

    def authorize(self, caller_id: str, command_name: str) -> AuthDecision:
        """Check ``caller_id`` against the allow-list and log the attempt."""
        if caller_id in self._allowed:
            _log(f'[auth] authorized user "{caller_id}" for "{command_name}"')
            return AuthDecision(allowed=True, caller_id=caller_id, command_name=command_name)

        _log(f'[auth] attempt to call "{command_name}" from unauthorized user "{caller_id}"')
        return AuthDecision(
            allowed=False,
            caller_id=caller_id,
            command_name=command_name,
            reason=f'user "{caller_id}" is not authorized to use "{command_name}"',
        )

    def require(self, caller_id: str, command_name: str) -> AuthDecision:
        """Like authorize(), but raises NotAuthorized on denial."""
        decision = self.authorize(caller_id, command_name)
        if not decision:
            raise NotAuthorized(decision.reason)
        return decision
