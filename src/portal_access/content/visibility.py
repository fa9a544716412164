"""Department-scoped visibility.

Visibility answers whether a user may discover a node at all. It ignores
permissions, ownership and the active flag, and it is evaluated on the node
itself: folders do not pass their visibility down to what they contain.
"""

from portal_access.content.models import ContentNode, visibility
from portal_access.profiles import UserAuthProfile


def is_visible(profile: UserAuthProfile, node: ContentNode) -> bool:
    """Check whether a node is visible to a user.

    A node visible to all departments is visible to every user, including
    users without any department. Otherwise the user must belong to at least
    one of the node's departments. Authorship grants nothing here: an owner
    who moves to another department loses sight of their own content.

    Args:
        profile: The user's authorization profile
        node: The content node

    Returns:
        True if the node is visible to the user
    """
    return visibility(node).admits(profile.departments)
