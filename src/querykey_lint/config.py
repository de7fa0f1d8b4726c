"""Configuration models and the YAML config file loader."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

log = logging.getLogger(__name__)

CONFIG_FILENAMES = (".querykeylint.yaml", ".querykeylint.yml")

DEFAULT_CLIENT_IDENTIFIER = "queryClient"
DEFAULT_WRAPPER_FUNCTION = "queryOptions"

DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ConfigError(Exception):
    """Raised when a config file cannot be read or does not validate."""


class RuleConfig(BaseModel):
    """Options for the no-plain-query-keys rule."""

    client_identifier_name: str = DEFAULT_CLIENT_IDENTIFIER
    wrapper_function_name: str = DEFAULT_WRAPPER_FUNCTION

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("client_identifier_name", "wrapper_function_name")
    @classmethod
    def _must_be_identifier(cls, v: str) -> str:
        if not _IDENTIFIER_RE.match(v):
            raise ValueError(f"{v!r} is not a valid JavaScript identifier")
        return v


class LintConfig(BaseModel):
    """Project-level settings: rule options plus file discovery."""

    rule: RuleConfig = Field(default_factory=RuleConfig)
    include_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_dirs: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("include_extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]


def find_config(project_path: Path) -> Path | None:
    """Return the first config file found at the project root, if any."""
    for name in CONFIG_FILENAMES:
        candidate = project_path / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> LintConfig:
    """Load and validate a YAML config file.

    An empty file yields the defaults.

    Raises:
        ConfigError: the file is unreadable, not YAML, or fails validation.
    """
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    try:
        config = LintConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}:\n{e}") from e

    log.debug("Loaded config from %s: %s", path, config.model_dump())
    return config


def resolve_config(
    project_path: Path,
    config_path: Path | None = None,
    *,
    client_identifier_name: str | None = None,
    wrapper_function_name: str | None = None,
) -> LintConfig:
    """Build the effective config: explicit file, else project file, else defaults.

    Explicit name overrides win over whatever the file says.
    """
    if config_path is None:
        config_path = find_config(project_path)
    config = load_config(config_path) if config_path else LintConfig()

    overrides: dict[str, str] = {}
    if client_identifier_name:
        overrides["client_identifier_name"] = client_identifier_name
    if wrapper_function_name:
        overrides["wrapper_function_name"] = wrapper_function_name
    if overrides:
        try:
            rule = RuleConfig.model_validate({**config.rule.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"Invalid rule option:\n{e}") from e
        config = config.model_copy(update={"rule": rule})

    return config
