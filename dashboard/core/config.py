# dashboard/core/config.py
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # URL do backend (REST API das contas)
    API_BASE_URL: str = "https://waheed-web.vercel.app"
    SIGNIN_PATH: str = "/api/sample/auth/signin"
    REQUEST_TIMEOUT: float = 10.0

    # Pasta onde a CLI guarda dados locais (cookies)
    APP_DIR: Path = Path.home() / ".hesabat"

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="HESABAT_", env_file=".env", extra="ignore")


settings = Settings()

# Ficheiro que faz o papel do cookie store do browser
COOKIE_FILE = settings.APP_DIR / "cookies.json"

ACCESS_TOKEN_COOKIE = "accessToken"
USER_ROLE_COOKIE = "userRole"
