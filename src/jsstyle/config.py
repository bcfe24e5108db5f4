"""Configuration loading.

Settings come from ``--config``, the ``JSSTYLE_CONFIG`` environment variable,
or the nearest ``jsstyle.toml`` / ``pyproject.toml`` (``[tool.jsstyle]``)
found walking up from the working directory, in that order.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jsstyle.errors import ConfigError
from jsstyle.models import Severity

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "JSSTYLE_CONFIG"
CONFIG_FILE_NAME = "jsstyle.toml"

_DEFAULT_EXCLUDE = ["node_modules", "dist", "build", ".git", "*.min.js"]


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class IndentOptions(_Options):
    size: int = Field(default=2, ge=1, le=16)
    style: Literal["space", "tab"] = "space"

    @property
    def unit(self) -> str:
        return "\t" if self.style == "tab" else " " * self.size


class QuoteOptions(_Options):
    prefer: Literal["single", "double"] = "single"
    avoid_escape: bool = True


class BraceStyleOptions(_Options):
    style: Literal["1tbs", "allman"] = "1tbs"
    allow_single_line: bool = True


class EqualityOptions(_Options):
    allow_null: bool = False


class NamingOptions(_Options):
    allow_leading_underscore: bool = True
    allow_leading_dollar: bool = True
    constant_case: bool = True


class GlobalOptions(_Options):
    top_level: bool = True
    known_globals: list[str] = []


class LintConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    select: list[str] = []
    ignore: list[str] = []
    exclude: list[str] = Field(default_factory=lambda: list(_DEFAULT_EXCLUDE))
    severity: dict[str, Severity] = {}
    indent: IndentOptions = IndentOptions()
    quotes: QuoteOptions = QuoteOptions()
    brace_style: BraceStyleOptions = Field(default=BraceStyleOptions(), alias="brace-style")
    eqeqeq: EqualityOptions = EqualityOptions()
    naming: NamingOptions = NamingOptions()
    no_globals: GlobalOptions = Field(default=GlobalOptions(), alias="no-globals")

    def with_overrides(self, select: list[str] | None = None, ignore: list[str] | None = None) -> "LintConfig":
        updates: dict[str, Any] = {}
        if select:
            updates["select"] = list(select)
        if ignore:
            updates["ignore"] = [*self.ignore, *ignore]
        return self.model_copy(update=updates) if updates else self


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def parse_config(data: dict[str, Any], source: str = "<config>") -> LintConfig:
    try:
        return LintConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}:\n{exc}") from exc


def load_config_file(path: Path) -> LintConfig:
    data = _read_toml(path)
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("jsstyle", {})
    return parse_config(data, str(path))


def find_config_file(start: Path) -> Path | None:
    for directory in [start, *start.parents]:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and "jsstyle" in _read_toml(pyproject).get("tool", {}):
            return pyproject
    return None


def load_config(path: str | Path | None = None, start: Path | None = None) -> LintConfig:
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None
    config_path = Path(path) if path else find_config_file((start or Path.cwd()).resolve())
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return LintConfig()
    logger.info("Loading configuration from %s", config_path)
    return load_config_file(config_path)
