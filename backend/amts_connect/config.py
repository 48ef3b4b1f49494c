from pydantic import computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    postgres_user: str = "amts"
    postgres_password: str = "amts_secret"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "amts_connect"
    database_dsn: str = ""  # full SQLAlchemy URL, overrides the postgres_* fields
    store_backend: str = "sql"  # "sql" or "memory"
    api_prefix: str = "/api"
    google_maps_api_key: str = ""
    log_level: str = "INFO"
    status_update_max_attempts: int = 5
    id_max_attempts: int = 5

    @computed_field
    @property
    def database_url(self) -> str:
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ("../.env", ".env")


settings = Settings()
