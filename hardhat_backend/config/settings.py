import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HAT_ID = 1


def _split_origins(value: str) -> List[str]:
    return [o.strip() for o in value.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    db_host: str = "localhost"
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "hardhat"
    db_port: int = 5432
    db_url: Optional[str] = None
    db_pool_size: int = 10
    db_pool_timeout: float = 10.0
    api_key: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 10000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_host=os.getenv("DB_HOST", "localhost"),
            db_user=os.getenv("DB_USER", "postgres"),
            db_password=os.getenv("DB_PASSWORD", ""),
            db_name=os.getenv("DB_NAME", "hardhat"),
            db_port=int(os.getenv("DB_PORT", "5432")),
            db_url=os.getenv("DB_URL") or None,
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            db_pool_timeout=float(os.getenv("DB_POOL_TIMEOUT", "10")),
            api_key=os.getenv("API_KEY") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "10000")),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def connection_kwargs(self) -> dict:
        """Keyword arguments for psycopg2.connect; a full DB_URL wins over the parts."""
        if self.db_url:
            return {"dsn": self.db_url}
        return {
            "host": self.db_host,
            "user": self.db_user,
            "password": self.db_password,
            "dbname": self.db_name,
            "port": self.db_port,
        }
