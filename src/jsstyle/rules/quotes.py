from collections.abc import Iterator

from jsstyle.config import LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel
from jsstyle.models import Violation

RULE_ID = "quotes"

_QUOTE_CHARS = {"single": "'", "double": '"'}
_QUOTE_NAMES = {"single": "singlequote", "double": "doublequote"}

# JSX attribute values follow HTML quoting.
_EXEMPT_PARENTS = frozenset({"jsx_attribute", "jsx_opening_element", "jsx_self_closing_element"})


@rule(RULE_ID, "Use the preferred quote character for string literals.")
def check_quotes(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    options = config.quotes
    preferred = _QUOTE_CHARS[options.prefer]
    for node in model.strings:
        if node.parent is not None and node.parent.type in _EXEMPT_PARENTS:
            continue
        text = model.text(node)
        if not text or text[0] == preferred:
            continue
        if options.avoid_escape and preferred in text[1:-1]:
            continue
        yield Violation.at(RULE_ID, model.position(node), f"Strings must use {_QUOTE_NAMES[options.prefer]}.")
