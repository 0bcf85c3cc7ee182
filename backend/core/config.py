from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Lexicon (None = packaged languages/macedonian/data/lexicon.yaml)
    MK_LEXICON_PATH: str | None = None

    # Content QA
    QA_DATA_DIR: str = "./data"
    QA_REPORTS_DIR: str = "./docs/qa-reports"

    # Adaptive difficulty
    ADAPTIVE_WINDOW_SIZE: int = 5
    ADAPTIVE_INCREASE_THRESHOLD: float = 0.8
    ADAPTIVE_DECREASE_THRESHOLD: float = 0.4
    ADAPTIVE_MAX_ADJUSTMENTS: int = 3
    ADAPTIVE_WARMUP_PERIOD: int = 3

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
