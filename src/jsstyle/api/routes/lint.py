from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from jsstyle.api.dependencies import get_config, get_registry
from jsstyle.api.schemas import LintRequest
from jsstyle.config import LintConfig
from jsstyle.core.lint import lint_source
from jsstyle.core.registry import RuleRegistry
from jsstyle.errors import UnknownRuleError, UnsupportedLanguageError
from jsstyle.models import FileReport

router = APIRouter(tags=["lint"])


@router.post("/lint", response_model=FileReport)
def lint(
    body: LintRequest,
    config: LintConfig = Depends(get_config),
    registry: RuleRegistry = Depends(get_registry),
) -> FileReport:
    """Lint a JavaScript snippet and return its violations."""
    settings = config.with_overrides(body.select, body.ignore)
    try:
        return lint_source(body.code, body.filename or "<string>", settings, registry)
    except (UnknownRuleError, UnsupportedLanguageError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
