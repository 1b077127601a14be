from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the food diary server and client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        data_root_default = base_dir.parent / "data"

        self.data_root: Path = Path(
            os.environ.get("FOOD_DIARY_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("FOOD_DIARY_DB_PATH") or (self.data_root / "food_diary.db")
        ).expanduser()
        # In production you MUST set FOOD_DIARY_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("FOOD_DIARY_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_hours: int = int(os.environ.get("FOOD_DIARY_TOKEN_TTL_HOURS") or "24")

        self.host: str = os.environ.get("FOOD_DIARY_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("FOOD_DIARY_PORT") or "8080")
        self.log_level: str = (os.environ.get("FOOD_DIARY_LOG_LEVEL") or "INFO").upper()

        # ---- client side ----
        self.api_base_url: str = os.environ.get(
            "FOOD_DIARY_API_BASE_URL", "http://localhost:8080/api"
        )
        self.client_storage_path: Path = Path(
            os.environ.get("FOOD_DIARY_CLIENT_STORAGE")
            or (Path.home() / ".food_diary" / "storage.json")
        ).expanduser()
        self.http_timeout: float = float(os.environ.get("FOOD_DIARY_HTTP_TIMEOUT") or "10")

        cors = os.environ.get("FOOD_DIARY_CORS_ORIGINS", "http://localhost:3000")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
