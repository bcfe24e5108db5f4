"""FastMCP server exposing jsstyle tools."""

from __future__ import annotations

import asyncio

from fastmcp import FastMCP

from jsstyle.config import LintConfig
from jsstyle.core.lint import lint_paths, lint_source
from jsstyle.core.registry import RuleRegistry, default_registry
from jsstyle.models import Violation


def _as_dicts(violations: list[Violation]) -> list[dict[str, object]]:
    return [v.model_dump(mode="json") for v in violations]


def create_mcp_server(config: LintConfig | None = None, registry: RuleRegistry | None = None) -> FastMCP:
    """Create a FastMCP server that lints with the given configuration."""

    settings = config if config is not None else LintConfig()
    rules = registry if registry is not None else default_registry()
    mcp = FastMCP("jsstyle", instructions="Check JavaScript code against the style guide.")

    @mcp.tool()
    async def lint_code(code: str, filename: str | None = None) -> list[dict[str, object]]:
        """Lint a JavaScript snippet and return its violations."""
        report = await asyncio.to_thread(lint_source, code, filename or "<string>", settings, rules)
        return _as_dicts(report.violations)

    @mcp.tool()
    async def lint_path(path: str) -> list[dict[str, object]]:
        """Lint a JavaScript file or directory and return its violations."""
        report = await asyncio.to_thread(lint_paths, [path], settings, rules)
        return _as_dicts(report.violations)

    @mcp.tool()
    async def list_rules() -> list[dict[str, str]]:
        """List the available style rules."""
        return [
            {"rule_id": r.rule_id, "description": r.description, "severity": r.default_severity.value}
            for r in rules.rules()
        ]

    return mcp
