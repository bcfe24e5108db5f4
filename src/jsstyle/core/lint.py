import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

from jsstyle.config import LintConfig
from jsstyle.core.evaluator import evaluate
from jsstyle.core.languages import detect_language_from_path, is_supported_file, normalize_language
from jsstyle.core.registry import Rule, RuleRegistry, default_registry
from jsstyle.core.scanner import scan_file, scan_source
from jsstyle.errors import SourceReadError, UnknownRuleError
from jsstyle.models import FileReport, LintReport

logger = logging.getLogger(__name__)


def active_rules(config: LintConfig, registry: RuleRegistry | None = None) -> list[Rule]:
    registry = registry if registry is not None else default_registry()
    for rule_id in config.severity:
        if rule_id not in registry:
            raise UnknownRuleError(rule_id)
    return registry.select(config.select or None, config.ignore)


def _source_language(path: str, language: str | None) -> str:
    if language:
        return normalize_language(language)
    return detect_language_from_path(Path(path)) if Path(path).suffix else "javascript"


def lint_source(
    source: str,
    path: str = "<string>",
    config: LintConfig | None = None,
    registry: RuleRegistry | None = None,
    language: str | None = None,
) -> FileReport:
    config = config if config is not None else LintConfig()
    resolved_language = _source_language(path, language)
    model = scan_source(source, path, resolved_language)
    violations = evaluate(model, active_rules(config, registry), config)
    return FileReport(path=path, language=resolved_language, violations=violations)


def lint_file(
    path: str | Path,
    config: LintConfig | None = None,
    registry: RuleRegistry | None = None,
) -> FileReport:
    config = config if config is not None else LintConfig()
    model = scan_file(path)
    violations = evaluate(model, active_rules(config, registry), config)
    return FileReport(path=model.path, language=model.language, violations=violations)


def is_excluded(path: Path, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(part, pattern) for pattern in patterns for part in path.parts)


def discover_files(paths: Iterable[str | Path], config: LintConfig | None = None) -> list[Path]:
    """Expand files and directories into the sorted list of lintable files."""
    config = config if config is not None else LintConfig()
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise SourceReadError(f"Path not found: {raw}")
        if path.is_file():
            # Explicitly named files are linted even when an exclude pattern matches.
            found.add(path)
            continue
        for candidate in path.rglob("*"):
            relative = candidate.relative_to(path)
            if candidate.is_file() and is_supported_file(candidate) and not is_excluded(relative, config.exclude):
                found.add(candidate)
    return sorted(found)


def lint_paths(
    paths: Iterable[str | Path],
    config: LintConfig | None = None,
    registry: RuleRegistry | None = None,
) -> LintReport:
    config = config if config is not None else LintConfig()
    files = discover_files(paths, config)
    logger.info("Linting %d file(s)", len(files))
    return LintReport(files=[lint_file(path, config, registry) for path in files])
