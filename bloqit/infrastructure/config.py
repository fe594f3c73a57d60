from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///:memory:"
    seed_path: Path | None = None
    id_max_attempts: int = 3
    log_level: str = "INFO"


settings = Settings()
