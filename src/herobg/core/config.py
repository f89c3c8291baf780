"""Configuration management for Hero BG Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the HEROBG_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (HEROBG_* prefix)
2. .env file in the project root
3. Default values defined in HeroBGConfig

Example .env file:
    HEROBG_DEFAULT_GENERATOR=gemini
    HEROBG_GEMINI_MODEL_ID=gemini-3-pro-image-preview
    HEROBG_HISTORY_LIMIT=8
    HEROBG_SERVER_PORT=7860

Credentials
-----------
The API key for the external image service is resolved from an ordered list
of sources rather than from one hard-coded variable:

1. ``HEROBG_API_KEY`` (the explicit ``api_key`` field)
2. each environment variable named in ``api_key_sources``, in order

The default source list is ``GEMINI_API_KEY``, ``GOOGLE_API_KEY``,
``API_KEY``.  Blank values are skipped.  Adapters receive the config object
in their constructor and call :meth:`HeroBGConfig.resolve_api_key`; they never
read the process environment on their own.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

    from herobg.core.config import config

    print(config.default_generator)
    print(config.history_limit)

See Also
--------
- HeroBGConfig: Full configuration class documentation
- herobg.core.generator_adapters: Registry used to pick the adapter by name
"""

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HeroBGConfig(BaseSettings):
    """Main configuration for Hero BG Studio.

    This class uses Pydantic Settings to manage all application configuration.
    Values are loaded from environment variables with the HEROBG_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Generator Settings:
        default_generator : Literal["gemini", "offline"]
            Name of the generator adapter used by the studio
        gemini_model_id : str
            Model identifier sent to the Google GenAI API
        api_key : str | None
            Explicit API key (takes precedence over api_key_sources)
        api_key_sources : list[str]
            Environment variable names tried in order when api_key is unset
        offline_latency_seconds : float
            Simulated latency for the offline preview adapter

    Session Settings:
        history_limit : int
            Number of results kept in the in-memory history (1-100)

    Server Settings:
        server_host : str
            Server bind address
        server_port : int
            Server port (1024-65535)
        log_level : str
            Root log level used by the console entry point

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = HeroBGConfig(
        ...     default_generator="offline",
        ...     history_limit=4,
        ... )

    Resolve the credential against an explicit environment:

        >>> cfg = HeroBGConfig(api_key_sources=["MY_KEY"])
        >>> cfg.resolve_api_key({"MY_KEY": "secret"})
        'secret'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HEROBG_",
        case_sensitive=False,
        extra="ignore",
    )

    # Generator settings
    default_generator: Literal["gemini", "offline"] = Field(
        default="gemini",
        description="Generator adapter used for new generations (gemini or offline)",
    )
    gemini_model_id: str = Field(
        default="gemini-3-pro-image-preview",
        description="Google GenAI image model identifier",
    )
    api_key: str | None = Field(
        default=None,
        description="Explicit API key; overrides api_key_sources when set",
    )
    api_key_sources: list[str] = Field(
        default_factory=lambda: ["GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"],
        description="Environment variables searched in order for the API key",
    )
    offline_latency_seconds: float = Field(
        default=0.0,
        description="Simulated latency for the offline preview adapter",
        ge=0.0,
        le=30.0,
    )

    # Session settings
    history_limit: int = Field(
        default=8,
        description="Maximum number of results kept in the session history",
        ge=1,
        le=100,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the console entry point",
    )

    def resolve_api_key(self, environ: Mapping[str, str] | None = None) -> str | None:
        """Resolve the API key from the configured sources.

        Args:
            environ: Mapping to read the fallback sources from.  Defaults to
                ``os.environ``; tests pass a plain dict.

        Returns:
            The first non-blank credential, or ``None`` if no source has one.
        """
        if self.api_key and self.api_key.strip():
            return self.api_key.strip()

        env = os.environ if environ is None else environ
        for name in self.api_key_sources:
            value = env.get(name)
            if value and value.strip():
                return value.strip()
        return None


# Global configuration instance
# Loads values from environment variables (HEROBG_* prefix) and .env file.
config = HeroBGConfig()
