"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from jsstyle.config import LintConfig
from jsstyle.core.evaluator import evaluate
from jsstyle.core.registry import RuleRegistry, default_registry
from jsstyle.core.scanner import SyntacticModel, scan_source
from jsstyle.models import Violation

_REPO_ROOT = Path(__file__).parent.parent

RunRule = Callable[..., list[Violation]]


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> RuleRegistry:
    """Return the registry holding the built-in rules."""
    return default_registry()


@pytest.fixture
def scan() -> Callable[[str], SyntacticModel]:
    """Return a helper that scans a JavaScript snippet."""
    return scan_source


@pytest.fixture
def run_rule(registry: RuleRegistry) -> RunRule:
    """Return a helper that runs one built-in rule against a snippet."""

    def _run(rule_id: str, source: str, config: LintConfig | None = None) -> list[Violation]:
        model = scan_source(source)
        return evaluate(model, [registry.get(rule_id)], config or LintConfig())

    return _run


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JSSTYLE_CONFIG", raising=False)
