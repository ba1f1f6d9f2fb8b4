# dashboard/core/session.py
import json
import logging
from typing import Optional

from . import config
from .config import ACCESS_TOKEN_COOKIE, USER_ROLE_COOKIE

logger = logging.getLogger(__name__)


def _read_jar() -> dict:
    """
    Lê o cookie jar (ficheiro JSON).
    Devolve {} se o ficheiro não existir ou estiver inválido.
    """
    if not config.COOKIE_FILE.exists():
        return {}

    try:
        with open(config.COOKIE_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Cookie file %s is unreadable: %s", config.COOKIE_FILE, exc)
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def _write_jar(data: dict) -> None:
    config.COOKIE_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(config.COOKIE_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)


def load_cookie(name: str) -> Optional[str]:
    """
    Read-only access to a single cookie. Non-string values count as missing.
    """
    value = _read_jar().get(name)
    if isinstance(value, str) and value:
        return value
    return None


def save_cookie(name: str, value: str) -> None:
    data = _read_jar()
    data[name] = value
    _write_jar(data)


def remove_cookie(name: str) -> None:
    data = _read_jar()
    if name in data:
        del data[name]
        _write_jar(data)


def clear_cookies() -> None:
    """
    Apaga o cookie jar, terminando a sessão local.
    """
    if config.COOKIE_FILE.exists():
        config.COOKIE_FILE.unlink()


def save_token(access_token: str) -> None:
    save_cookie(ACCESS_TOKEN_COOKIE, access_token)


def load_token() -> Optional[str]:
    return load_cookie(ACCESS_TOKEN_COOKIE)


def is_logged_in() -> bool:
    return load_token() is not None


def clear_session() -> None:
    remove_cookie(ACCESS_TOKEN_COOKIE)
    remove_cookie(USER_ROLE_COOKIE)
