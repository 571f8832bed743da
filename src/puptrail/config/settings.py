from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import upper_choice, lower_choice, expand_path


class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    Every variable can be overridden with a `PUPTRAIL_` prefixed environment variable
    (e.g. `PUPTRAIL_DATA_DIR=/srv/rescue`) or through the `.env` file next to the package.
    """

    # Environment
    ENV: Literal["development", "testing", "production"] = "development"

    # Store location
    DATA_DIR: Path = Path("~/PupTrails/PupTrailsDocs")
    DB_FILE_NAME: str = "PupTrail.db"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_TO_STDOUT: bool = True
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DOCS_ROOT(self) -> Path:
        return self.DATA_DIR

    @property
    def STORE_DIR(self) -> Path:
        return self.DOCS_ROOT / "data"

    @property
    def ATTACHMENTS_DIR(self) -> Path:
        return self.DOCS_ROOT / "attachments"

    @property
    def BACKUPS_DIR(self) -> Path:
        return self.DOCS_ROOT / "backups"

    @property
    def LOGS_DIR(self) -> Path:
        return self.DOCS_ROOT / "logs"

    @property
    def STORE_PATH(self) -> Path:
        """
        Full path of the store file.

        The file name is fixed so every process that reads the store (the application
        and the maintenance utility) resolves the same file without extra configuration.
        """
        return self.STORE_DIR / self.DB_FILE_NAME

    @property
    def DATABASE_URL(self) -> str:
        return f"sqlite:///{self.STORE_PATH.as_posix()}"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL value to uppercase before Literal validation runs,
        so `LOG_LEVEL=debug` in the environment is accepted.
        """
        return upper_choice(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT value to lowercase.
        """
        return lower_choice(v)

    @field_validator("DATA_DIR", mode="before")
    def normalize_data_dir(cls, v: str | Path | None) -> Path | None:
        # `~` and relative paths are resolved once, at load time
        return expand_path(v)

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        env_prefix="PUPTRAIL_",
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached. Tests build their own Settings(DATA_DIR=tmp_path) instead.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
