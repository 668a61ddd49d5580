import os
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

load_dotenv()


class AppConfig(BaseModel):
    storage_root: Path = Field(
        default=Path.home() / "Documents" / "smartmd",
        description="Root directory for keys, documents, config and logs"
    )

    secret_key: str = Field(
        default="",
        description="Fernet key used to encrypt stored API keys"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level for the CLI"
    )

    @field_validator('storage_root')
    @classmethod
    def validate_storage_root(cls, v: Path) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid SMARTMD_LOG_LEVEL: {v}")
        return level

    @property
    def keys_file(self) -> Path:
        return self.storage_root / "keys.json"

    @property
    def documents_dir(self) -> Path:
        return self.storage_root / "documents"

    @property
    def logs_dir(self) -> Path:
        return self.storage_root / "logs"

    model_config = {
        "frozen": True,
        "validate_assignment": True
    }


def _load_config() -> AppConfig:
    return AppConfig(
        storage_root=Path(os.getenv('SMARTMD_STORAGE_ROOT', '~/Documents/smartmd')),
        secret_key=os.getenv('SMARTMD_SECRET_KEY', '').strip(),
        log_level=os.getenv('SMARTMD_LOG_LEVEL', 'INFO'),
    )


Config = _load_config()
