# dashboard/main.py
import logging

import typer

from dashboard.auth.commands import app as auth_app
from dashboard.core.config import settings
from dashboard.ledgers.commands import app as ledgers_app
from dashboard.nav.commands import app as nav_app

app = typer.Typer(help="لوحة التحكم - Hesabat accounting dashboard")
app.add_typer(auth_app, name="auth")
app.add_typer(nav_app, name="nav")
app.add_typer(ledgers_app, name="ledgers")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    app()
