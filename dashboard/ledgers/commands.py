# dashboard/ledgers/commands.py
from typing import Dict, List, Optional, Tuple

import typer

from dashboard.core.api import (
    ApiError,
    api_create_record,
    api_delete_record,
    api_list_records,
    api_update_record,
)
from dashboard.core.catalog import Ledger, SubSection, find_ledger, iter_ledgers
from dashboard.core.models import RolePermissions
from dashboard.core.rbac import get_role_permissions
from dashboard.core.session import load_token

app = typer.Typer(help="Ledger commands (list, add, update, delete records).")

ACCESS_DENIED = "غير مخول للوصول إلى هذه الصفحة"
META_FIELDS = ("_id", "id", "createdAt", "updatedAt")


def _parse_fields(fields: Optional[List[str]]) -> Dict[str, str]:
    data = {}
    for item in fields or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint="--field")
        data[key.strip()] = value
    return data


def _open_ledger(slug: str) -> Tuple[str, SubSection, Ledger, RolePermissions]:
    """
    Resolves a ledger and checks the current role may open it.
    Exits with code 1 when there is no session or access is denied.
    """
    token = load_token()
    if not token:
        typer.echo("No active session. Please run `hesabat auth login` first.")
        raise typer.Exit(code=1)

    entry = find_ledger(slug)
    if entry is None:
        typer.echo(f"Unknown ledger '{slug}'. Run `hesabat ledgers catalog` to see the ledgers.")
        raise typer.Exit(code=1)
    _section, sub, ledger = entry

    permissions = get_role_permissions(sub.component)
    if not permissions.can_access:
        typer.echo(ACCESS_DENIED)
        raise typer.Exit(code=1)

    return token, sub, ledger, permissions


def _record_id(record: dict) -> str:
    return str(record.get("_id") or record.get("id") or "")


@app.command("catalog")
def show_catalog():
    """
    List the ledgers the current role can open.
    """
    found = False
    for section, sub, ledger in iter_ledgers():
        if not get_role_permissions(sub.component).can_access:
            continue
        found = True
        typer.echo(f"{ledger.slug:40} {section.title} / {ledger.title}")

    if not found:
        typer.echo(ACCESS_DENIED)
        raise typer.Exit(code=1)


@app.command("list")
def list_records(
    ledger_slug: str = typer.Argument(..., help="Ledger slug (e.g. worker-account)"),
):
    """
    List the records of a ledger.
    """
    token, _sub, ledger, permissions = _open_ledger(ledger_slug)

    try:
        records = api_list_records(token, ledger.endpoint)
    except ApiError as exc:
        typer.echo(exc.message)
        raise typer.Exit(code=1)

    typer.echo(ledger.title)
    if not records:
        typer.echo("لا توجد سجلات")
        return

    for record in records:
        details = ", ".join(f"{k}={v}" for k, v in record.items() if k not in META_FIELDS)
        typer.echo(f"{_record_id(record):26} {details}")

    if not (permissions.can_edit or permissions.can_delete):
        typer.echo("(read-only)")


@app.command("add")
def add_record(
    ledger_slug: str = typer.Argument(..., help="Ledger slug"),
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Field as key=value"),
):
    """
    Add a record to a ledger.
    """
    record = _parse_fields(field)
    if not record:
        typer.echo("يرجى ملء جميع الحقول المطلوبة")
        raise typer.Exit(code=1)

    token, _sub, ledger, _permissions = _open_ledger(ledger_slug)

    try:
        api_create_record(token, ledger.endpoint, record)
    except ApiError as exc:
        typer.echo(exc.message)
        raise typer.Exit(code=1)

    typer.echo("تم إضافة السجل بنجاح")


@app.command("update")
def update_record(
    ledger_slug: str = typer.Argument(..., help="Ledger slug"),
    record_id: str = typer.Argument(..., help="Record ID"),
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Field as key=value"),
):
    """
    Update fields of a record (admin only).
    """
    fields = _parse_fields(field)
    if not fields:
        typer.echo("Nothing to update.")
        raise typer.Exit(code=1)

    token, _sub, ledger, permissions = _open_ledger(ledger_slug)
    if not permissions.can_edit:
        typer.echo("ليس لديك صلاحية التعديل")
        raise typer.Exit(code=1)

    try:
        api_update_record(token, ledger.endpoint, record_id, fields)
    except ApiError as exc:
        typer.echo(exc.message)
        raise typer.Exit(code=1)

    typer.echo("تم تحديث السجل بنجاح")


@app.command("delete")
def delete_record(
    ledger_slug: str = typer.Argument(..., help="Ledger slug"),
    record_id: str = typer.Argument(..., help="Record ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete without confirmation"),
):
    """
    Delete a record (admin only).
    """
    token, _sub, ledger, permissions = _open_ledger(ledger_slug)
    if not permissions.can_delete:
        typer.echo("ليس لديك صلاحية الحذف")
        raise typer.Exit(code=1)

    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete record {record_id} from '{ledger.title}'?")
        if not confirm:
            typer.echo("Operation cancelled.")
            raise typer.Exit(code=0)

    try:
        api_delete_record(token, ledger.endpoint, record_id)
    except ApiError as exc:
        typer.echo(exc.message)
        raise typer.Exit(code=1)

    typer.echo("تم حذف السجل بنجاح")
