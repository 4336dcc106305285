# reaxml/inputs/settings.py
"""
Parser settings for REA XML ingestion.

Goals
-----
- One frozen, validated settings object threaded through `parse`.
- Minimal environment-variable overrides for CI/CLI convenience.

Environment overrides (optional)
--------------------------------
- REAXML_CLEAN_BAD_CHARS -> Settings.are_bad_characters_removed (1/true/yes/on)
- REAXML_KEEP_SOURCE     -> Settings.keep_source_data
- REAXML_MAX_WORKERS     -> Settings.max_workers (int, 1..64)

Unparsable values are ignored and the validated defaults kept.

Public API
----------
- class Settings
- class SettingsLoader:
    - load(**overrides) -> Settings
- function load_settings(**overrides) -> Settings  (convenience)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings(BaseModel):
    """Runtime options controlling one parse invocation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    are_bad_characters_removed: bool = Field(
        False,
        description="If True, strip characters XML 1.0 forbids before parsing instead of failing the document.",
    )
    keep_source_data: bool = Field(
        True,
        description="If True, each ListingOutcome carries the verbatim XML of its listing element.",
    )
    max_workers: int = Field(
        1,
        ge=1,
        le=64,
        description="Thread fan-out for per-listing build. 1 = serial. Output order is unaffected.",
    )


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class SettingsLoader:
    """
    Defaults → environment → explicit keyword overrides (last wins).
    """

    env_prefix: str = "REAXML_"

    def load(self, **overrides: Any) -> Settings:
        base = self._apply_env_overrides(Settings())
        if not overrides:
            return base
        try:
            return Settings.model_validate({**base.model_dump(), **overrides})
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    # ---------- Internals ----------

    @staticmethod
    def _flag(raw: str | None) -> bool | None:
        if raw is None:
            return None
        normalized = raw.strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSY:
            return False
        return None

    def _apply_env_overrides(self, cfg: Settings) -> Settings:
        """
        Apply light, optional overrides from environment variables.
        """
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        clean = self._flag(os.getenv(f"{prefix}CLEAN_BAD_CHARS"))
        if clean is not None:
            updates["are_bad_characters_removed"] = clean

        keep = self._flag(os.getenv(f"{prefix}KEEP_SOURCE"))
        if keep is not None:
            updates["keep_source_data"] = keep

        workers = os.getenv(f"{prefix}MAX_WORKERS")
        if workers:
            try:
                n = int(workers)
            except ValueError:
                n = 0
            if 1 <= n <= 64:
                updates["max_workers"] = n
            else:
                logger.warning("Ignoring %sMAX_WORKERS=%r (expected an integer in 1..64)", prefix, workers)

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)


# ----------------------------
# Convenience function
# ----------------------------


def load_settings(**overrides: Any) -> Settings:
    """Convenience wrapper for one-shot callers."""
    return SettingsLoader().load(**overrides)
