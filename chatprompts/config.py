"""Configuration with environment variable support.

All settings can be overridden via environment variables prefixed with
``CHATPROMPTS_``, or via a ``.env`` file in the working directory.

Examples::

    CHATPROMPTS_PROMPTS_DIR=./my_prompts chatprompts check
    CHATPROMPTS_LOG_LEVEL=DEBUG chatprompts render summarize_thread
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """chatprompts configuration — all values overridable via env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CHATPROMPTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Templates (None = the templates bundled with the package)
    prompts_dir: Optional[Path] = None
    prompt_extension: str = "tmpl"

    # Fail startup when a registered prompt has no template file
    require_all_prompts: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None


# Singleton instance — import this everywhere
settings = Settings()
