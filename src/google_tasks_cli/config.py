"""
Configuration management using Pydantic for validation.

Supports loading from:
- YAML files (optional)
- Environment variables with GOOGLE_TASKS_CLI_ prefix
- OP_VAULT / OP_ITEM_NAME for the 1Password item holding the OAuth client
"""

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "google-tasks-cli"

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/tasks.readonly",
    "https://www.googleapis.com/auth/photoslibrary.appendonly",
    "https://www.googleapis.com/auth/photoslibrary.edit.appcreateddata",
    "https://www.googleapis.com/auth/photoslibrary.readonly.appcreateddata",
]


def default_token_path() -> Path:
    """Token location under the XDG data directory."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(data_home) / APP_NAME / "token.json"


class OnePasswordSettings(BaseSettings):
    """1Password CLI lookup configuration."""

    model_config = SettingsConfigDict(env_prefix="OP_", extra="ignore")

    vault: str = Field(
        default="Private",
        description="Vault holding the OAuth client item",
    )
    item_name: str = Field(
        default="Google Tasks API",
        description="Item with client_id and client_secret fields",
    )
    cli_path: str = Field(
        default="op",
        description="1Password CLI executable",
    )


class OAuthSettings(BaseModel):
    """OAuth2 authorization-code flow configuration."""

    redirect_host: str = Field(
        default="localhost",
        description="Host the local callback listener binds to",
    )
    redirect_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the local callback listener binds to. "
        "Must match the redirect URI registered for the OAuth client.",
    )
    scopes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="OAuth scopes requested on authorization",
    )
    open_browser: bool = Field(
        default=True,
        description="Open the authorization URL in the default browser",
    )
    reuse_token: bool = Field(
        default=False,
        description="Reuse (and refresh) a stored token instead of re-authorizing every run",
    )

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.redirect_host}:{self.redirect_port}"


class PhotosSettings(BaseModel):
    """Google Photos Library configuration."""

    page_size: int = Field(
        default=25,
        ge=1,
        le=100,
        description="Items requested per page when walking the whole library",
    )
    preview_page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Items shown by photos-list without --all",
    )
    upload_path: Path = Field(
        default=Path("assets/cat.jpg"),
        description="File uploaded by photos-upload when no path is given",
    )
    upload_description: str = Field(
        default="A cute cat photo uploaded via Google Photos API",
        description="Description attached to uploaded media items",
    )

    @field_validator("upload_path", mode="before")
    @classmethod
    def parse_upload_path(cls, v):
        """Convert string path to Path object."""
        if isinstance(v, str):
            return Path(v)
        return v


class TasksSettings(BaseModel):
    """Google Tasks listing configuration."""

    show_completed: bool = Field(default=False, description="Include completed tasks")
    show_deleted: bool = Field(default=False, description="Include deleted tasks")
    show_hidden: bool = Field(default=False, description="Include hidden tasks")


class Settings(BaseSettings):
    """
    Main application settings.

    Can be loaded from:
    - YAML file: Settings.from_yaml("config.yaml")
    - Environment variables: GOOGLE_TASKS_CLI_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_TASKS_CLI_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    token_path: Path = Field(
        default_factory=default_token_path,
        description="JSON file the OAuth token is written to",
    )
    onepassword: OnePasswordSettings = Field(
        default_factory=OnePasswordSettings,
        description="1Password credential source",
    )
    oauth: OAuthSettings = Field(
        default_factory=OAuthSettings,
        description="OAuth flow settings",
    )
    photos: PhotosSettings = Field(
        default_factory=PhotosSettings,
        description="Google Photos settings",
    )
    tasks: TasksSettings = Field(
        default_factory=TasksSettings,
        description="Google Tasks settings",
    )

    @field_validator("token_path", mode="before")
    @classmethod
    def parse_token_path(cls, v):
        """Convert string path to Path object, expanding ~."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """
        Load settings from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
