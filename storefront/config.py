from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "local"

    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_db: str = "storefront"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    # full URL wins over the postgres_* parts (tests, sqlite, managed DBs)
    sqlalchemy_url: Optional[str] = None

    pool_size: int = 10
    pool_recycle: int = 1800

    secret_key: str = "change-me"
    algorithm: str = "HS256"

    transaction_timeout_ms: int = 5000
    number_attempts: int = 5

    invoice_storage_dir: str = "/invoices"
    invoice_base_url: str = "https://cdn.yourapp.com/invoices"

    log_level: str = "INFO"

    @property
    def database_url(self):
        if self.sqlalchemy_url:
            return self.sqlalchemy_url

        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"


settings = Settings()
