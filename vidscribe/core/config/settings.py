# File: vidscribe/core/config/settings.py

import os
import shutil
from pathlib import Path
from typing import List


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    # --- Paths ---
    # vidscribe/core/config/settings.py -> vidscribe/core/config -> vidscribe/core -> vidscribe -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("VIDSCRIBE_DATA_DIR", str(BASE_DIR / "data")))

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "vidscribe_db")

    @property
    def DATABASE_URL(self) -> str:
        # Any backend works as long as it enforces unique constraints.
        explicit = os.getenv("VIDSCRIBE_DATABASE_URL")
        if explicit:
            return explicit

        if os.getenv("VIDSCRIBE_DB_BACKEND", "sqlite").lower() == "postgres":
            return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

        # Default: local SQLite file under DATA_DIR
        return f"sqlite:///{self.DATA_DIR / 'vidscribe.db'}"

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- Translation ---
    TRANSLATION_ENDPOINTS: List[str] = _env_list(
        "VIDSCRIBE_TRANSLATION_ENDPOINTS",
        [
            "https://libretranslate.de/translate",
            "https://translate.argosopentech.com/translate",
            "https://libretranslate.com/translate",
            "https://translate.fortytwo-it.com/translate",
        ],
    )
    TRANSLATION_PROBE_TIMEOUT: float = float(os.getenv("VIDSCRIBE_TRANSLATION_PROBE_TIMEOUT", "3.0"))
    TRANSLATION_CALL_TIMEOUT: float = float(os.getenv("VIDSCRIBE_TRANSLATION_CALL_TIMEOUT", "8.0"))
    TRANSLATION_MAX_RETRIES: int = int(os.getenv("VIDSCRIBE_TRANSLATION_MAX_RETRIES", "2"))
    TRANSLATION_BACKOFF_SECONDS: float = float(os.getenv("VIDSCRIBE_TRANSLATION_BACKOFF_SECONDS", "1.0"))
    TRANSLATION_CACHE_TTL: float = float(os.getenv("VIDSCRIBE_TRANSLATION_CACHE_TTL", str(24 * 60 * 60)))

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
