"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MILESTONEPROXY__MONDAY__API_KEY=...)
  2. milestoneproxy.yaml    (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional. The Monday.com key and board id have no default;
without them the milestones endpoint reports NOT_CONFIGURED instead of failing
at startup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first milestoneproxy.yaml found, or None."""
    candidates = [
        Path("milestoneproxy.yaml"),
        Path(platformdirs.user_config_dir("milestoneproxy")) / "milestoneproxy.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 10000
    # "*" or a comma-separated list, e.g. "https://contoso.sharepoint.com"
    allowed_origins: str = "*"
    static_dir: str = "public"

    @property
    def origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        if not origins or "*" in origins:
            return ["*"]
        return origins


class ColumnSettings(BaseModel):
    """Board column identifiers projected into the milestone schema."""

    description: str = "long_text_mkp52kd7"
    date: str = "date4"
    portfolio: str = "dropdown_mkp5e1h0"
    sponsor: str = "person"
    lead: str = "multiple_person_mkr3784v"
    timeline: str = "timerange_mkpca05e"
    status: str = "status"


class MondaySettings(BaseModel):
    api_url: str = "https://api.monday.com/v2"
    api_key: str | None = None
    board_id: str | None = None
    api_version: str | None = None
    items_limit: int = Field(default=200, ge=1, le=500)
    timeout_seconds: float = 30.0
    columns: ColumnSettings = ColumnSettings()

    @property
    def configured(self) -> bool:
        return bool(self.api_key) and bool(self.board_id)


class DocumentSettings(BaseModel):
    ttl_seconds: int = Field(default=3600, ge=0)
    max_entries: int = Field(default=64, ge=1)
    timeout_seconds: float = 30.0
    max_redirects: int = Field(default=5, ge=0)
    block_private_ips: bool = True
    max_matches: int = Field(default=8, ge=1)
    snippet_context: int = Field(default=90, ge=0)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MILESTONEPROXY__SERVER__PORT=9090
        env_prefix="MILESTONEPROXY__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    monday: MondaySettings = MondaySettings()
    documents: DocumentSettings = DocumentSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
