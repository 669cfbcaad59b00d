"""Configuration schema for ai-specflow.

Defines Pydantic models for the optional YAML config file, with sections
for ``init`` defaults, managed block markers, and logging.  Every section
has defaults, so ``SpecflowConfig()`` (zero-config) is always valid.

Usage:
    from ai_specflow.config_schema import build_config

    raw = load_hierarchical_config(target)
    config = build_config(raw)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from .providers import PROVIDER_NAMES
from .sync.merger import MARKER_END, MARKER_START, ManagedBlock

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class InitConfig(BaseModel):
    """Defaults for the ``init`` command.

    CLI flags take precedence: ``--force`` turns force on, and any
    ``--with-*`` flag replaces ``providers`` entirely.
    """

    force: bool = Field(
        default=False, description="Overwrite existing scaffold files"
    )
    providers: list[str] = Field(
        default_factory=list,
        description="Providers enabled when no --with-* flag is given",
    )

    model_config = {"frozen": True}

    @field_validator("providers")
    @classmethod
    def _known_providers(cls, value: list[str]) -> list[str]:
        normalized = [v.strip().lower() for v in value]
        unknown = [v for v in normalized if v not in PROVIDER_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown provider(s) {', '.join(unknown)}; "
                f"valid: {', '.join(PROVIDER_NAMES)}"
            )
        return normalized


class MarkersConfig(BaseModel):
    """Managed block sentinels used when merging wrapper files."""

    start: str = Field(default=MARKER_START, min_length=1)
    end: str = Field(default=MARKER_END, min_length=1)

    model_config = {"frozen": True}

    def to_block(self) -> ManagedBlock:
        return ManagedBlock(start=self.start, end=self.end)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="WARNING", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


class SpecflowConfig(BaseModel):
    """Top-level configuration aggregating all sections."""

    init: InitConfig = Field(default_factory=InitConfig)
    markers: MarkersConfig = Field(default_factory=MarkersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Factory function
# ---------------------------------------------------------------------------


def build_config(raw_data: dict) -> SpecflowConfig:
    """Construct a ``SpecflowConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Handles missing sections gracefully: anything absent gets defaults.

    Args:
        raw_data: Merged configuration dictionary.

    Returns:
        Validated ``SpecflowConfig`` instance.

    Raises:
        pydantic.ValidationError: If a section has invalid values.
    """
    if not raw_data:
        return SpecflowConfig()

    return SpecflowConfig(**raw_data)
