"""Configuration module for notexfr."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from notexfr import __version__

# Load environment variables from the project root .env file.
# Anchored to __file__ so it works regardless of the process CWD.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# User-level config lives alongside any log files
_USER_ENV = Path.home() / ".notexfr" / ".env"
load_dotenv(_USER_ENV)


logger = logging.getLogger(__name__)

# Namespaces for StandardNotes item appData
SN_APP_DATA_KEY = "org.standardnotes.sn"
EVERNOTE_APP_DATA_KEY = "evernote.com"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NotexfrConfig(BaseModel):
    """Configuration for notexfr operations."""

    # Logging configuration
    log_level: str = Field(
        default_factory=lambda: os.getenv("NOTEXFR_LOG_LEVEL", "WARNING").upper()
    )
    # When set, logs are also written to a rotating file in this directory
    log_dir: Optional[Path] = Field(
        default_factory=lambda: (
            Path(os.getenv("NOTEXFR_LOG_DIR"))
            if os.getenv("NOTEXFR_LOG_DIR")
            else None
        )
    )
    # Prefix for a synthesized notebook tag whose name is already a tag title
    conflict_prefix: str = Field(
        default_factory=lambda: os.getenv("NOTEXFR_CONFLICT_PREFIX", "conflict - ")
    )
    # Indentation for JSON output; None writes compact JSON
    json_indent: Optional[int] = Field(
        default_factory=lambda: (
            int(os.getenv("NOTEXFR_JSON_INDENT"))
            if os.getenv("NOTEXFR_JSON_INDENT")
            else None
        )
    )
    version: str = Field(default=__version__)

    @model_validator(mode="after")
    def _validate(self) -> "NotexfrConfig":
        """Validate logging and output settings."""
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}; got {self.log_level!r}"
            )
        if self.json_indent is not None and self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")
        if not self.conflict_prefix:
            logger.warning(
                "Empty conflict_prefix: notebooks sharing a tag title will keep their name"
            )
        return self

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.log_level, logging.WARNING)


# Create a global config instance
config = NotexfrConfig()
