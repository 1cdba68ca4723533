"""Configuration loaded from TABKEEPER_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tabkeeper.execution.reopen import DEFAULT_OPEN_DELAY, DEFAULT_SETTLE_DELAY
from tabkeeper.managers.workspaces import DEFAULT_STATE_KEY


class TabkeeperSettings(BaseSettings):
    """tabkeeper settings.

    All fields are read from environment variables with the ``TABKEEPER_``
    prefix.  For example, ``TABKEEPER_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    List values are JSON: ``TABKEEPER_CUSTOM_FILE_TYPE_ORDER='["md", "ts"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TABKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    data_root: str = "./data"
    """Root directory for persisted workspace state."""

    data_prefix: str | None = None
    """Optional namespace inserted as ``{data_root}/{data_prefix}/...``."""

    state_key: str = DEFAULT_STATE_KEY

    # -- Reopen pacing ---------------------------------------------------------
    settle_delay: float = Field(default=DEFAULT_SETTLE_DELAY, ge=0)
    """Seconds to wait after closing all tabs before reopening."""

    open_delay: float = Field(default=DEFAULT_OPEN_DELAY, ge=0)
    """Seconds to wait between successive tab opens."""

    # -- Behaviour -------------------------------------------------------------
    custom_file_type_order: list[str] = Field(default_factory=list)
    """Extensions that sort first, in this order."""

    auto_save_before_load: bool = False
    """Snapshot the open tabs into the previous-workspace slot before each load."""


def get_settings() -> TabkeeperSettings:
    """Return a cached settings instance.

    Call ``_get_settings_cached.cache_clear()`` in tests to force a re-read
    after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> TabkeeperSettings:
    return TabkeeperSettings()
