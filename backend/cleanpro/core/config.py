from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Annotated, Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "CleanPro Console API"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'cleanpro.db'}"

    # CORS origins
    # NoDecode: split_origins parses both comma lists and JSON itself
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_ALL: bool = False

    LOG_LEVEL: str = "INFO"

    # Single fixed currency for every priced field
    DEFAULT_CURRENCY: str = "USD"

    # Seed the default cleaning catalog on startup when the rates table is empty
    SEED_DEFAULT_RATES: bool = True

    # Run the prospect/proposal follow-up after a quote is stored
    QUOTE_BRIDGE_ENABLED: bool = True

    RECENT_QUOTES_LIMIT: int = 10

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("LOG_LEVEL", "DEFAULT_CURRENCY", mode="before")
    def normalize_upper(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def allow_all_if_requested(cls, values: "Settings") -> "Settings":
        if values.CORS_ALLOW_ALL:
            values.CORS_ORIGINS = ["*"]
        return values

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
    )


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()
