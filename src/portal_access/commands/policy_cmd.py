"""Commands: portal-access effective / check / visible - Explain decisions."""

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from portal_access.core.errors import AppException


if TYPE_CHECKING:
    from portal_access.policy import Policy


console = Console()

POLICY_ARGUMENT = typer.Argument(..., help="Path to a YAML policy file")
USER_OPTION = typer.Option(..., "--user", "-u", help="User id from the policy file")


def _load(path: Path) -> "Policy":
    from portal_access.policy import load_policy

    try:
        return load_policy(path)
    except (AppException, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


def effective(
    policy_path: Path = POLICY_ARGUMENT,
    user_id: str = USER_OPTION,
) -> None:
    """Show a user's effective permission set."""
    policy = _load(policy_path)
    try:
        profile = policy.profile(user_id)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message} ({user_id})")
        raise typer.Exit(1) from None

    permissions = sorted(policy.checker.effective_permissions(profile))

    console.print(f"\n[bold cyan]Effective permissions for[/bold cyan] {user_id}\n")
    if not permissions:
        console.print("[yellow]No permissions.[/yellow]")
        return
    for key in permissions:
        console.print(f"  - {key}")
    console.print()


def check(
    policy_path: Path = POLICY_ARGUMENT,
    user_id: str = USER_OPTION,
    node_id: str = typer.Option(..., "--node", "-n", help="Node id from the policy file"),
    action_name: str = typer.Option(
        ..., "--action", "-a", help="Action name (e.g. 'files.delete')"
    ),
) -> None:
    """Decide one action and print the internal reason.

    Exits with status 1 when access is denied.
    """
    from portal_access.access.actions import get_action

    policy = _load(policy_path)
    try:
        profile = policy.profile(user_id)
        node = policy.tree.get(node_id)
        action = get_action(action_name)
        decision = policy.engine.decide(profile, node, action)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from None

    verdict = "[green]allowed[/green]" if decision.allowed else "[red]denied[/red]"
    console.print(f"\n{verdict} reason={decision.reason.value}", highlight=False)
    if decision.required_permission:
        console.print(f"required permission: {decision.required_permission}")
    console.print()

    if not decision.allowed:
        raise typer.Exit(1)


def visible(
    policy_path: Path = POLICY_ARGUMENT,
    user_id: str = USER_OPTION,
    parent_id: str | None = typer.Option(
        None, "--parent", "-p", help="List a folder's contents instead of all nodes"
    ),
) -> None:
    """List the nodes a user would see."""
    policy = _load(policy_path)
    try:
        profile = policy.profile(user_id)
        if parent_id is not None:
            policy.tree.get(parent_id)
            candidates = policy.tree.children(parent_id)
        else:
            candidates = list(policy.tree)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from None

    nodes = policy.engine.filter_visible(profile, candidates)
    if not nodes:
        console.print("[yellow]No visible nodes.[/yellow]")
        return

    table = Table(title=f"Visible to {user_id}", show_header=True)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Departments")
    table.add_column("Active", no_wrap=True)

    for node in nodes:
        table.add_row(
            node.id,
            getattr(node, "kind", type(node).__name__),
            ", ".join(node.visibility.to_stored()),
            "yes" if node.active else "[yellow]no[/yellow]",
        )

    console.print()
    console.print(table)
    console.print()
