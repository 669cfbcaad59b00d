"""
Hierarchical configuration loader for ai-specflow.

Provides convention-based config file discovery, env var interpolation,
and hierarchical merge with "project wins" semantics.

Usage:
    from ai_specflow.config_loader import load_hierarchical_config

    config = load_hierarchical_config(target)
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AI_SPECFLOW_CONFIG"
PROJECT_CONFIG_DIR = ".ai-specflow"

# ---------------------------------------------------------------------------
# 1. Env var interpolation
# ---------------------------------------------------------------------------

# Matches ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` patterns with env values.

    * ``${VAR}`` is replaced with ``os.environ.get(VAR, "")``.
    * ``${VAR:-default}`` uses *default* when VAR is unset or empty.
    * Literal ``${`` with no closing ``}`` is left untouched.
    """

    def _replace(match: re.Match) -> str:
        var_name = match.group(1)
        default = match.group(2)  # None when no :- clause
        env_val = os.environ.get(var_name)
        if env_val is not None and env_val != "":
            return env_val
        if default is not None:
            return default
        return ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate_recursive(obj: Any) -> Any:
    """Walk a nested dict/list and interpolate env vars in all strings."""
    if isinstance(obj, str):
        return interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _interpolate_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_interpolate_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# 2. YAML loading
# ---------------------------------------------------------------------------


class ConfigLoader(yaml.SafeLoader):
    """Dedicated SafeLoader subclass so the global ``yaml.SafeLoader`` is
    never modified."""


def load_yaml_file(path: Path) -> Any:
    """Load a single YAML file with ``ConfigLoader``."""
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.load(fh, Loader=ConfigLoader)


# ---------------------------------------------------------------------------
# 3. Convention-based file discovery
# ---------------------------------------------------------------------------


def discover_config_files(target: Path | None = None) -> list[Path]:
    """Return existing config file paths in precedence order (highest first).

    Search order:
        1. ``AI_SPECFLOW_CONFIG`` env var (explicit single path)
        2. ``<target>/.ai-specflow/config.yml`` (project-level)
        3. ``<target>/.ai-specflow/config.yaml`` (alternate extension)
        4. ``~/.config/ai-specflow/config.yml`` (XDG global)

    *target* defaults to the current working directory.  Only paths that
    exist on disk are returned.
    """
    candidates: list[Path] = []

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser().resolve())

    project = Path(target) if target is not None else Path.cwd()
    candidates.append(project / PROJECT_CONFIG_DIR / "config.yml")
    candidates.append(project / PROJECT_CONFIG_DIR / "config.yaml")

    candidates.append(
        Path.home() / ".config" / "ai-specflow" / "config.yml"
    )

    return [p for p in candidates if p.exists()]


# ---------------------------------------------------------------------------
# 4. Hierarchical merge
# ---------------------------------------------------------------------------


def load_config_files(paths: list[Path]) -> dict[str, Any]:
    """Load and merge *paths* given in precedence order (highest first).

    Files are loaded from lowest precedence to highest.  Each file's
    top-level keys **replace** (not deep-merge) those from earlier files.
    Env var interpolation is applied after merging.
    """
    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            data = load_yaml_file(path)
        except Exception:
            logger.exception("Failed to load config file %s", path)
            raise

        if isinstance(data, dict):
            # Shallow merge: top-level keys from higher-precedence win
            merged.update(data)
        elif data is not None:
            logger.warning(
                "Config file %s has non-dict root (%s): skipping",
                path,
                type(data).__name__,
            )

    return _interpolate_recursive(merged)


def load_hierarchical_config(
    target: Path | None = None,
    explicit_path: Path | None = None,
) -> dict[str, Any]:
    """Discover, load, and merge config files.

    When *explicit_path* is given (``--config``) it is the only file read
    and it must exist.  Otherwise ``discover_config_files(target)`` is
    used.

    Returns an empty dict when no config files exist (zero-config).

    Raises:
        FileNotFoundError: If *explicit_path* does not exist.
        yaml.YAMLError: If a config file is not valid YAML.
    """
    if explicit_path is not None:
        explicit_path = Path(explicit_path).expanduser()
        if not explicit_path.is_file():
            raise FileNotFoundError(
                f"Config file not found: {explicit_path}"
            )
        return load_config_files([explicit_path])

    paths = discover_config_files(target)
    if not paths:
        logger.debug(
            "No config files found: using zero-config defaults"
        )
        return {}

    return load_config_files(paths)
