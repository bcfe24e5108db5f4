import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from jsstyle.config import LintConfig
from jsstyle.core.registry import SYNTAX_ERROR_RULE, Rule
from jsstyle.core.scanner import SyntacticModel
from jsstyle.errors import RuleExecutionError
from jsstyle.models import Violation

logger = logging.getLogger(__name__)

_DIRECTIVE = re.compile(r"jsstyle-(disable-next-line|disable-line|disable-file)\b([^\n*]*)")
_ALL_RULES = "*"


@dataclass
class Suppressions:
    """Rule ids silenced by inline comments, keyed by 1-based line."""

    file_rules: set[str] = field(default_factory=set)
    line_rules: dict[int, set[str]] = field(default_factory=dict)

    @classmethod
    def from_model(cls, model: SyntacticModel) -> "Suppressions":
        suppressions = cls()
        for comment in model.comments:
            for match in _DIRECTIVE.finditer(model.text(comment)):
                directive, raw_ids = match.groups()
                ids = {part for part in re.split(r"[\s,]+", raw_ids.split("--", 1)[0].strip()) if part} or {_ALL_RULES}
                if directive == "disable-file":
                    suppressions.file_rules |= ids
                elif directive == "disable-line":
                    suppressions.line_rules.setdefault(comment.start_point[0] + 1, set()).update(ids)
                else:
                    suppressions.line_rules.setdefault(comment.end_point[0] + 2, set()).update(ids)
        return suppressions

    def covers(self, violation: Violation) -> bool:
        if violation.rule_id == SYNTAX_ERROR_RULE:
            return False
        for ids in (self.file_rules, self.line_rules.get(violation.line, set())):
            if _ALL_RULES in ids or violation.rule_id in ids:
                return True
        return False


def syntax_error(model: SyntacticModel) -> Violation | None:
    if not model.error_nodes:
        return None
    node = min(model.error_nodes, key=lambda n: n.start_byte)
    if node.is_missing:
        message = f"Parsing error: missing '{node.type}'."
    else:
        snippet = model.text(node).split("\n", 1)[0].strip()[:20]
        message = f"Parsing error: unexpected '{snippet}'." if snippet else "Parsing error: unexpected token."
    return Violation.at(SYNTAX_ERROR_RULE, model.position(node), message).model_copy(update={"path": model.path})


def evaluate(model: SyntacticModel, rules: Iterable[Rule], config: LintConfig) -> list[Violation]:
    """Run every rule against one model and return the surviving violations, sorted."""
    violations: list[Violation] = []
    parse_error = syntax_error(model)
    if parse_error is not None:
        violations.append(parse_error)

    for active in rules:
        try:
            found = list(active.check(model, config))
        except Exception as exc:
            raise RuleExecutionError(active.rule_id, model.path) from exc
        severity = config.severity.get(active.rule_id, active.default_severity)
        violations.extend(v.model_copy(update={"severity": severity, "path": model.path}) for v in found)

    suppressions = Suppressions.from_model(model)
    kept = [v for v in violations if not suppressions.covers(v)]
    kept.sort(key=lambda v: (v.line, v.column, v.rule_id))
    logger.debug("%s: %d violation(s), %d suppressed", model.path, len(kept), len(violations) - len(kept))
    return kept

