"""Access decisions over content nodes."""

from portal_access.access.actions import ACTIONS, get_action
from portal_access.access.decorators import require_access, require_permission
from portal_access.access.engine import (
    AccessDecision,
    AccessDecisionEngine,
    Action,
    DecisionReason,
    ensure_allowed,
)


__all__ = [
    "ACTIONS",
    "AccessDecision",
    "AccessDecisionEngine",
    "Action",
    "DecisionReason",
    "ensure_allowed",
    "get_action",
    "require_access",
    "require_permission",
]
