"""Named actions used by the portal's content features."""

from portal_access.access.engine import Action
from portal_access.core.errors import ValidationError


ACTIONS: dict[str, Action] = {
    # File storage (folders, files, links)
    "files.view": Action.single("files:view"),
    "files.download": Action.single("files:download"),
    "files.upload": Action.single("files:upload"),
    "files.create_folder": Action.single("files:create_folder"),
    "files.share": Action.single("files:share"),
    "files.delete": Action(own="files:delete_own", any="files:delete_any"),
    # Knowledge base
    "knowledge.view": Action.single("knowledge:view"),
    "knowledge.edit": Action(own="knowledge:edit_own", any="knowledge:edit_any"),
    "knowledge.delete": Action(own="knowledge:delete_own", any="knowledge:delete_any"),
    # Institutional areas
    "institutional.view": Action.single("institutional:view"),
    "institutional.edit": Action.single("institutional:edit"),
    "institutional.delete": Action.single("institutional:delete"),
    "institutional.view_inactive": Action.single(
        "institutional:manage", allows_inactive=True
    ),
    # Job postings
    "jobs.view": Action.single("jobs:view"),
    "jobs.edit": Action.single("jobs:edit"),
    "jobs.delete": Action.single("jobs:delete"),
    "jobs.view_inactive": Action.single("jobs:manage", allows_inactive=True),
}


def get_action(name: str) -> Action:
    """Look up a named action.

    Raises:
        ValidationError: If no action has that name
    """
    try:
        return ACTIONS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown action '{name}'",
            error_code="unknown_action",
            details={"available": sorted(ACTIONS)},
        ) from None
