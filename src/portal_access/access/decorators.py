"""Decorators for guarding handler functions.

Handlers receive the acting user's profile as the ``profile`` keyword
argument and, for node operations, the target node as ``node`` (or the name
passed as ``node_kwarg``).
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import structlog

from portal_access.access.engine import AccessDecisionEngine, Action, ensure_allowed
from portal_access.content.models import ContentNode
from portal_access.core.errors import AccessDeniedError, ForbiddenError
from portal_access.permissions.checker import PermissionChecker
from portal_access.profiles import UserAuthProfile


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def _get_profile(kwargs: dict[str, Any]) -> UserAuthProfile:
    profile = cast("UserAuthProfile | None", kwargs.get("profile"))
    if profile is None:
        raise ForbiddenError(
            "Authentication required",
            error_code="auth_required",
        )
    return profile


def require_access(
    engine: AccessDecisionEngine,
    action: Action,
    node_kwarg: str = "node",
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that routes a node operation through the decision engine.

    Usage:
        @require_access(engine, ACTIONS["files.delete"])
        def delete_file(*, profile: UserAuthProfile, node: File) -> None:
            ...

    Args:
        engine: The decision engine
        action: The action the handler performs
        node_kwarg: Name of the keyword argument holding the node

    Returns:
        Decorator function

    Raises:
        AccessDeniedError: If the node is missing or the decision is a denial
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            profile = _get_profile(kwargs)
            node = cast("ContentNode | None", kwargs.get(node_kwarg))

            # A missing node is reported exactly like a denied one
            if node is None:
                logger.info(
                    "access_denied",
                    reason="node_missing",
                    user_id=profile.user_id,
                    handler=func.__name__,
                )
                raise AccessDeniedError()

            decision = engine.decide(profile, node, action)
            ensure_allowed(
                decision,
                user_id=profile.user_id,
                node_id=node.id,
                handler=func.__name__,
            )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def require_permission(
    checker: PermissionChecker,
    key: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires a permission for operations not tied to a node.

    Usage:
        @require_permission(checker, "roles:manage")
        def create_role(*, profile: UserAuthProfile, name: str) -> Role:
            ...

    Raises:
        ForbiddenError: If the user lacks the permission
        UnknownPermissionError: If the key is not in the catalog
    """
    checker.catalog.validate([key])

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            profile = _get_profile(kwargs)

            if not checker.has_permission(profile, key):
                logger.info(
                    "permission_denied",
                    user_id=profile.user_id,
                    required_permission=key,
                    handler=func.__name__,
                )
                raise ForbiddenError(
                    f"Missing required permission: {key}",
                    error_code="permission_denied",
                    details={"required_permissions": [key]},
                )

            return func(*args, **kwargs)

        return wrapper

    return decorator
