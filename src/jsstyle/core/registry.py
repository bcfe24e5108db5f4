import importlib
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jsstyle.errors import DuplicateRuleError, UnknownRuleError
from jsstyle.models import RuleInfo, Severity, Violation

if TYPE_CHECKING:
    from jsstyle.config import LintConfig
    from jsstyle.core.scanner import SyntacticModel

CheckFunction = Callable[["SyntacticModel", "LintConfig"], Iterable[Violation]]

SYNTAX_ERROR_RULE = "syntax-error"


@dataclass(frozen=True)
class Rule:
    rule_id: str
    description: str
    check: CheckFunction
    default_severity: Severity = Severity.ERROR

    def info(self) -> RuleInfo:
        return RuleInfo(rule_id=self.rule_id, description=self.description, default_severity=self.default_severity)


class RuleRegistry:
    """Ordered collection of named, independent checks."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> Rule:
        if rule.rule_id in self._rules or rule.rule_id == SYNTAX_ERROR_RULE:
            raise DuplicateRuleError(f"Rule '{rule.rule_id}' is already registered")
        self._rules[rule.rule_id] = rule
        return rule

    def get(self, rule_id: str) -> Rule:
        try:
            return self._rules[rule_id]
        except KeyError:
            raise UnknownRuleError(rule_id) from None

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def rules(self) -> list[Rule]:
        return list(self._rules.values())

    def ids(self) -> list[str]:
        return list(self._rules)

    def select(self, select: Sequence[str] | None = None, ignore: Iterable[str] = ()) -> list[Rule]:
        """Return the active rules, in registration order.

        ``select`` narrows the set to the given ids (all rules when empty or
        ``None``); ``ignore`` then removes ids from it. Every id must name a
        registered rule.
        """
        ignored = set(ignore)
        for rule_id in [*(select or ()), *ignored]:
            if rule_id not in self._rules:
                raise UnknownRuleError(rule_id)
        chosen = set(select) if select else set(self._rules)
        return [r for r in self._rules.values() if r.rule_id in chosen and r.rule_id not in ignored]


_DEFAULT_REGISTRY = RuleRegistry()


def rule(
    rule_id: str,
    description: str,
    severity: Severity = Severity.ERROR,
    registry: RuleRegistry | None = None,
) -> Callable[[CheckFunction], CheckFunction]:
    """Register the decorated check function as a rule."""

    def decorator(check: CheckFunction) -> CheckFunction:
        target = registry if registry is not None else _DEFAULT_REGISTRY
        target.register(Rule(rule_id=rule_id, description=description, check=check, default_severity=severity))
        return check

    return decorator


def default_registry() -> RuleRegistry:
    importlib.import_module("jsstyle.rules")
    return _DEFAULT_REGISTRY
