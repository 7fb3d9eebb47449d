"""Runtime settings for apply-edits.

Settings are plain data passed by reference to every apply routine. Defaults
come from ``constants``; each field can be overridden through environment
variables (optionally loaded from a ``.env`` file):

- APPLY_EDITS_SIMILARITY_THRESHOLD: closest-match similarity floor (default 0.5)
- APPLY_EDITS_MAX_CLOSEST_MATCHES: closest matches per failure (default 3)
- APPLY_EDITS_PREVIEW_LENGTH: search preview length in characters (default 200)
- APPLY_EDITS_LARGE_FILE_THRESHOLD: mmap read threshold in bytes (default 102400)
- APPLY_EDITS_AUTOCORRECT_THRESHOLD: minimum confidence for auto-correction
  (unset disables auto-correction)
- APPLY_EDITS_REQUIRE_UNIQUE_MATCH: fail ``replace`` on ambiguous searches
"""

import logging
import os
from typing import Callable, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from apply_edits.constants import (
    LARGE_FILE_THRESHOLD,
    MAX_CLOSEST_MATCHES,
    PREVIEW_LENGTH,
    SIMILARITY_THRESHOLD,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "APPLY_EDITS_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


class EditSettings(BaseModel):
    """Tunable thresholds for matching, diagnostics and auto-correction."""

    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(
        SIMILARITY_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for a window to be reported as a closest match",
    )
    max_closest_matches: int = Field(
        MAX_CLOSEST_MATCHES, ge=0, description="Closest matches reported per failure"
    )
    preview_length: int = Field(
        PREVIEW_LENGTH, ge=4, description="Characters kept in search/anchor previews"
    )
    large_file_threshold: int = Field(
        LARGE_FILE_THRESHOLD,
        ge=0,
        description="Files larger than this many bytes are read through mmap",
    )
    autocorrect_threshold: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Apply auto-corrections with at least this confidence (None disables)",
    )
    require_unique_match: bool = Field(
        False, description="Fail replace edits whose search occurs more than once"
    )

    @classmethod
    def from_env(cls, **overrides) -> "EditSettings":
        """Build settings from ``APPLY_EDITS_*`` environment variables.

        Invalid values are logged and the default is kept. Keyword overrides
        that are not None take precedence over the environment.

        Returns:
            A frozen EditSettings instance
        """
        load_dotenv()

        parsers: Dict[str, Callable[[str], object]] = {
            "similarity_threshold": float,
            "max_closest_matches": int,
            "preview_length": int,
            "large_file_threshold": int,
            "autocorrect_threshold": float,
            "require_unique_match": _parse_bool,
        }

        values = {}
        for field_name, parse in parsers.items():
            env_name = ENV_PREFIX + field_name.upper()
            raw = os.getenv(env_name)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[field_name] = parse(raw)
            except ValueError:
                logger.warning(
                    f"Ignoring invalid {env_name}={raw!r}; using default "
                    f"{cls.model_fields[field_name].default!r}"
                )

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValueError as e:
            logger.warning(f"Invalid settings from environment ({e}); using defaults")
            return cls(**{k: v for k, v in overrides.items() if v is not None})
