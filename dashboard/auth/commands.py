import getpass
import re
from datetime import datetime, timezone

import typer

from dashboard.core.api import ApiError, api_sign_in
from dashboard.core.config import USER_ROLE_COOKIE
from dashboard.core.models import Claims
from dashboard.core.rbac import has_edit_delete_permission
from dashboard.core.session import clear_session, is_logged_in, load_token, save_cookie, save_token
from dashboard.core.tokens import decode_token


app = typer.Typer(help="Authentication commands (login, logout, whoami)")

USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_.-]{3,64}$")


def _format_ts(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


@app.command("login")
def login(
    username: str = typer.Option(None, "--username", "-u", help="Username"),
):
    """
    Sign in. Only allowed if no session is active.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    if username is None:
        username = typer.prompt("اسم المستخدم")

    if not USERNAME_REGEX.match(username):
        typer.echo("Invalid username.")
        raise typer.Exit(code=1)

    password = getpass.getpass("كلمة المرور: ")

    try:
        data = api_sign_in(username, password)
    except ApiError as exc:
        typer.echo(exc.message)
        raise typer.Exit(code=1)

    token = data.get("accessToken")
    if not token:
        typer.echo("Login failed (no access token in response).")
        raise typer.Exit(code=1)

    save_token(token)

    # Legacy role cookie, used only when the token has no userName claim
    payload = decode_token(token)
    if payload and isinstance(payload.get("role"), str):
        save_cookie(USER_ROLE_COOKIE, payload["role"])
    elif isinstance(data.get("role"), str):
        save_cookie(USER_ROLE_COOKIE, data["role"])

    typer.echo(data.get("message") or "تم تسجيل الدخول بنجاح")


@app.command("logout")
def logout():
    """
    End session and delete local cookies.
    """
    clear_session()
    typer.echo("تم تسجيل الخروج بنجاح")


@app.command("whoami")
def whoami():
    """
    Show the claims carried by the current access token.
    """
    token = load_token()
    if not token:
        typer.echo("No active session. Please login first.")
        raise typer.Exit(code=1)

    claims = Claims.from_payload(decode_token(token))
    if claims is None:
        typer.echo("Make sure the token is a valid JWT format.")
        raise typer.Exit(code=1)

    typer.echo(f"User ID:   {claims.user_id or '-'}")
    typer.echo(f"Role:      {claims.role or '-'}")
    typer.echo(f"Username:  {claims.user_name or '-'}")
    if claims.issued_at is not None:
        typer.echo(f"Issued At: {_format_ts(claims.issued_at)}")
    if claims.expires_at is not None:
        typer.echo(f"Expires:   {_format_ts(claims.expires_at)}")
        left = claims.seconds_left()
        if left < 0:
            typer.echo("TOKEN IS EXPIRED!")
        else:
            typer.echo(f"Token is valid for {left // 3600}h {(left % 3600) // 60}m")

    if has_edit_delete_permission():
        typer.echo("Edit/Delete: allowed")
    else:
        typer.echo("Edit/Delete: read-only")
