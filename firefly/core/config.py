# File: firefly/core/config.py

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, field_validator


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    return [i.strip() for i in os.getenv(name, default).split(",") if i.strip()]


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = "FireFly API"
    VERSION: str = "0.1.0"

    api_v1_prefix: str = "/api/v1"
    debug: bool = _env_flag("FIREFLY_DEBUG", "1")
    log_level: str = os.getenv("FIREFLY_LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[str] = _env_list(
        "FIREFLY_CORS_ORIGINS",
        "http://localhost:3000,https://localhost:3000,http://localhost:5173",
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./firefly.db")

    # Document templates (relative to the working directory)
    template_root: str = os.getenv("FIREFLY_TEMPLATE_ROOT", "public")
    default_template_path: str = os.getenv(
        "FIREFLY_DEFAULT_TEMPLATE", "document template/Report_Template_250324.pdf"
    )
    # Optional JSON file overriding the built-in placeholder positions
    position_table_path: Optional[str] = os.getenv("FIREFLY_POSITION_TABLE") or None

    # Best-effort notification sink for saved documents
    webhook_url: Optional[str] = os.getenv("FIREFLY_WEBHOOK_URL") or None
    webhook_timeout: float = float(os.getenv("FIREFLY_WEBHOOK_TIMEOUT", "5"))

    # Standalone document server
    document_server_port: int = int(os.getenv("PORT", "3001"))

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
