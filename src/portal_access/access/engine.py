"""Access decision engine.

Combines the permission resolver, department visibility and ownership into
the one question content features ask: may this user perform this action on
this node? Decisions are computed fresh on every call from immutable inputs,
so the engine can be shared by concurrent request handlers without locking.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

import structlog

from portal_access.content.models import ContentNode, is_active, owner
from portal_access.content.visibility import is_visible
from portal_access.core.errors import AccessDeniedError
from portal_access.permissions.catalog import PermissionCatalog
from portal_access.permissions.checker import PermissionChecker
from portal_access.profiles import UserAuthProfile


logger = structlog.get_logger()

NodeT = TypeVar("NodeT", bound=ContentNode)


@dataclass(frozen=True)
class Action:
    """Permission pair for an operation on a node.

    Attributes:
        own: Key required when the user owns the node
        any: Key required for a node owned by someone else
        allows_inactive: Marks the administrative "view inactive" action,
            which is not stopped by the inactive check
    """

    own: str
    any: str
    allows_inactive: bool = False

    @classmethod
    def single(cls, key: str, *, allows_inactive: bool = False) -> "Action":
        """Build an action with no ownership distinction."""
        return cls(own=key, any=key, allows_inactive=allows_inactive)

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.own,) if self.own == self.any else (self.own, self.any)


class DecisionReason(StrEnum):
    OK = "ok"
    NOT_VISIBLE = "not_visible"
    MISSING_PERMISSION = "missing_permission"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class AccessDecision:
    """Verdict for one (user, node, action) triple.

    ``reason`` is for audit logs and admin diagnostics only; requesters
    must see every denial the same way.
    """

    allowed: bool
    reason: DecisionReason
    required_permission: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


def ensure_allowed(decision: AccessDecision, **context: object) -> None:
    """Raise for a denied decision.

    Args:
        decision: The decision to enforce
        **context: Extra key/values for the audit log entry

    Raises:
        AccessDeniedError: If the decision is a denial, whatever the reason
    """
    if decision.allowed:
        return
    logger.info(
        "access_denied",
        reason=decision.reason.value,
        required_permission=decision.required_permission,
        **context,
    )
    raise AccessDeniedError()


class AccessDecisionEngine:
    """Decides access to content nodes and filters listings."""

    def __init__(
        self,
        checker: PermissionChecker,
        catalog: PermissionCatalog | None = None,
    ) -> None:
        self.checker = checker
        self.catalog = catalog or checker.catalog

    def decide(
        self,
        profile: UserAuthProfile,
        node: ContentNode,
        action: Action,
    ) -> AccessDecision:
        """Decide whether a user may perform an action on a node.

        The checks run in a fixed order: inactive, then visibility, then the
        own/any permission. Visibility comes before permission so that even
        an ``_any`` permission cannot reach content outside the user's
        departments.

        Args:
            profile: The user's authorization profile
            node: The target node
            action: The requested action

        Returns:
            The decision with its reason

        Raises:
            UnknownPermissionError: If the action names a key not in the catalog
        """
        self.catalog.validate(action.keys)

        if not is_active(node) and not action.allows_inactive:
            if not self.has_manage_override(profile, node.category):
                return self._deny(profile, node, DecisionReason.INACTIVE)

        if not is_visible(profile, node):
            return self._deny(profile, node, DecisionReason.NOT_VISIBLE)

        required = action.own if owner(node) == profile.user_id else action.any
        if not self.checker.has_permission(profile, required):
            return self._deny(
                profile, node, DecisionReason.MISSING_PERMISSION, required
            )

        return AccessDecision(True, DecisionReason.OK, required)

    def require(
        self,
        profile: UserAuthProfile,
        node: ContentNode,
        action: Action,
    ) -> AccessDecision:
        """Decide and raise ``AccessDeniedError`` on any denial."""
        decision = self.decide(profile, node, action)
        ensure_allowed(decision, user_id=profile.user_id, node_id=node.id)
        return decision

    def filter_visible(
        self,
        profile: UserAuthProfile,
        nodes: Iterable[NodeT],
    ) -> list[NodeT]:
        """Keep the nodes a user may see in a listing, in input order.

        Inactive nodes are kept only for holders of their category's manage
        key. Invisible siblings are dropped without a trace.

        Args:
            profile: The user's authorization profile
            nodes: Candidate nodes

        Returns:
            Subsequence of ``nodes``
        """
        overrides: dict[str, bool] = {}
        visible: list[NodeT] = []
        total = 0

        for node in nodes:
            total += 1
            if not is_active(node):
                if node.category not in overrides:
                    overrides[node.category] = self.has_manage_override(
                        profile, node.category
                    )
                if not overrides[node.category]:
                    continue
            if is_visible(profile, node):
                visible.append(node)

        logger.debug(
            "listing_filtered",
            user_id=profile.user_id,
            candidates=total,
            visible=len(visible),
        )
        return visible

    def decide_many(
        self,
        profile: UserAuthProfile,
        nodes: Sequence[ContentNode],
        action: Action,
    ) -> dict[str, AccessDecision]:
        """Decide one action for several nodes, keyed by node id."""
        return {node.id: self.decide(profile, node, action) for node in nodes}

    def has_manage_override(self, profile: UserAuthProfile, category: str) -> bool:
        """Check the category-level manage key used for inactive content.

        Categories without a manage key offer no override.
        """
        key = self.catalog.admin_override_key_for(category)
        return key is not None and self.checker.has_permission(profile, key)

    def _deny(
        self,
        profile: UserAuthProfile,
        node: ContentNode,
        reason: DecisionReason,
        required: str | None = None,
    ) -> AccessDecision:
        logger.debug(
            "access_decision_denied",
            user_id=profile.user_id,
            node_id=node.id,
            node_kind=getattr(node, "kind", type(node).__name__),
            reason=reason.value,
            required_permission=required,
        )
        return AccessDecision(False, reason, required)
