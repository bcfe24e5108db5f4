from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel
from jsstyle.models import Violation

RULE_ID = "eqeqeq"

_STRICT_OPERATORS = {"==": "===", "!=": "!=="}


def _compares_null(node: Node) -> bool:
    sides = (node.child_by_field_name("left"), node.child_by_field_name("right"))
    return any(side is not None and side.type == "null" for side in sides)


@rule(RULE_ID, "Use === and !== instead of == and !=.")
def check_equality(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    for node in model.binaries:
        operator = node.child_by_field_name("operator")
        if operator is None or operator.type not in _STRICT_OPERATORS:
            continue
        if config.eqeqeq.allow_null and _compares_null(node):
            continue
        yield Violation.at(
            RULE_ID,
            model.position(operator),
            f"Expected '{_STRICT_OPERATORS[operator.type]}' and instead saw '{operator.type}'.",
        )
