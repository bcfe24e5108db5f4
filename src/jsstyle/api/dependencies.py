from __future__ import annotations

from jsstyle.config import LintConfig, load_config
from jsstyle.core.registry import RuleRegistry, default_registry

_config: LintConfig | None = None


def get_config() -> LintConfig:
    """Return the server-wide ``LintConfig``, loading it lazily on first call."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = load_config()
    return _config


def get_registry() -> RuleRegistry:
    return default_registry()


def reset_config() -> None:
    global _config  # noqa: PLW0603
    _config = None
