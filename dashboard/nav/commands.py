# dashboard/nav/commands.py
from typing import List, Optional

import typer

from dashboard.core.catalog import SECTIONS, Component
from dashboard.core.rbac import (
    DEFAULT_POLICY,
    VALID_ROLES,
    ComponentState,
    component_state,
    get_role_permissions,
    get_user_role,
    resolve_permissions,
    should_show_component,
)

app = typer.Typer(help="Navigation commands (sections visible to the current role).")

STATE_MARKERS = {
    ComponentState.VISIBLE_UNLOCKED: "[open]",
    ComponentState.VISIBLE_LOCKED: "[locked]",
}


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


@app.command("show")
def show_navigation():
    """
    Show the sections and sub-sections the current role can see.
    """
    role = get_user_role()
    if role not in VALID_ROLES:
        typer.echo("غير مصرح لك بدخول هذه الصفحة")
        raise typer.Exit(code=1)

    typer.echo(f"Role: {role}")
    for section in SECTIONS:
        if not resolve_permissions(role, section.component).can_access:
            continue

        typer.echo("")
        typer.echo(f"{section.title}  ({section.id})")
        for sub in section.subsections:
            state = component_state(role, sub.component)
            if state is ComponentState.HIDDEN:
                continue
            typer.echo(f"  {STATE_MARKERS[state]:9} {sub.component.value}  ({sub.id})")


@app.command("check")
def check_components(
    names: Optional[List[str]] = typer.Argument(None, help="Component names (default: all)"),
):
    """
    Permission matrix of the current role for the given components.
    """
    role = get_user_role()
    typer.echo(f"Role: {role or '(none)'}")

    targets = names or [component.value for component in Component]
    typer.echo(f"{'Access':7} {'Edit':5} {'Delete':7} {'Visible':8} Component")
    typer.echo("-" * 60)
    for name in targets:
        permissions = get_role_permissions(name)
        visible = should_show_component(name)
        typer.echo(
            f"{_yes_no(permissions.can_access):7} {_yes_no(permissions.can_edit):5} "
            f"{_yes_no(permissions.can_delete):7} {_yes_no(visible):8} {name}"
        )
        if Component.lookup(name) is None:
            typer.echo("        (unknown component name)")


@app.command("audit")
def audit_policy():
    """
    Report sub-sections where the access and restricted tables disagree.
    """
    entries = DEFAULT_POLICY.drift()
    if not entries:
        typer.echo("Access and restricted tables are consistent.")
        return

    for entry in entries:
        typer.echo(
            f"{entry.role:10} {entry.state.value:17} access={_yes_no(entry.can_access):4} {entry.component.value}"
        )
    raise typer.Exit(code=1)
