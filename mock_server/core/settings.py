from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Hesabat mock API"
    DATABASE_URL: str = "sqlite:///./mock_server.db"

    # Auth Config
    SECRET_KEY: str = "dev-only-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Seeded users: admin/admin123 and factoryN/factoryN123
    SEED_USERS: bool = True

    model_config = SettingsConfigDict(env_prefix="MOCK_", env_file=".env", extra="ignore")

settings = Settings()
