"""Configuration management for linearsync."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linearsync.errors import ConfigurationError

MAPPING_FILE_NAME = "linear-mapping.json"


class Settings(BaseSettings):
    """linearsync configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Linear
    linear_api_key: str = Field(
        default="",
        description="Linear personal API key",
    )
    linear_team_id: str = Field(
        default="",
        description="Linear team ID issues and projects are created in",
    )
    linear_api_url: str = Field(
        default="https://api.linear.app/graphql",
        description="Linear GraphQL endpoint",
    )

    # Paths
    linear_sync_root: Path = Field(
        default_factory=Path.cwd,
        description="Project root containing tasks.md and .specify/",
    )
    mapping_file_path: Path | None = Field(
        default=None,
        description="Override for the task mapping file (relative to root)",
    )
    tasks_file: Path | None = Field(
        default=None,
        description="Path to tasks.md (discovered when unset)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Retry policy for Linear calls
    retry_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per Linear call before giving up",
    )
    retry_base_delay: float = Field(
        default=1.0,
        ge=0,
        description="Initial backoff delay in seconds, doubled per retry",
    )

    @field_validator("linear_sync_root", mode="before")
    @classmethod
    def resolve_root(cls, v: str | Path) -> Path:
        """Resolve root path."""
        return Path(v).expanduser().resolve()

    @property
    def specify_dir(self) -> Path:
        """Path to .specify directory."""
        return self.linear_sync_root / ".specify"

    @property
    def mapping_path(self) -> Path:
        """Path to the task mapping JSON file."""
        if self.mapping_file_path:
            return self.linear_sync_root / self.mapping_file_path
        return self.specify_dir / MAPPING_FILE_NAME

    def missing_linear_settings(self) -> list[str]:
        """Return the environment variables required for Linear that are unset."""
        missing = []
        if not self.linear_api_key:
            missing.append("LINEAR_API_KEY")
        if not self.linear_team_id:
            missing.append("LINEAR_TEAM_ID")
        return missing

    def require_linear(self) -> None:
        """Ensure Linear credentials and team scope are present.

        Raises:
            ConfigurationError: If any required setting is missing.
        """
        missing = self.missing_linear_settings()
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} is required")


def load_settings(root: Path | None = None) -> Settings:
    """Load settings from environment and .env file.

    Args:
        root: Optional root directory override. Its ``.env`` (or
            ``.specify/.env``) is used when present.

    Returns:
        Settings instance.
    """
    env_file = None
    if root:
        env_file = root / ".env"
        if not env_file.exists():
            env_file = root / ".specify" / ".env"
            if not env_file.exists():
                env_file = None

    if env_file:
        # _env_file is a valid pydantic-settings parameter
        return Settings(_env_file=env_file, linear_sync_root=root)  # type: ignore[call-arg]
    if root:
        return Settings(linear_sync_root=root)
    return Settings()


def print_missing_config_help(error: ConfigurationError) -> None:
    """Print helpful message for missing configuration."""
    print("\n" + "=" * 60)
    print("linearsync Configuration Error")
    print("=" * 60 + "\n")
    print(f"  {error}")
    print()
    print("Example .env file:")
    print("-" * 40)
    print("LINEAR_API_KEY=lin_api_xxxxxxxx")
    print("LINEAR_TEAM_ID=your-team-uuid")
    print()
    print("# Optional")
    print("MAPPING_FILE_PATH=.specify/linear-mapping.json")
    print("LOG_LEVEL=INFO")
    print("-" * 40)
    print()
    print("Create an API key at https://linear.app/settings/api")
    print()
