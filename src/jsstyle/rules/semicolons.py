from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel
from jsstyle.models import Violation

RULE_ID = "semi"

# Declarations and expressions inside `for (...)` carry the loop's own separators.
_LOOP_HEADERS = frozenset({"for_statement", "for_in_statement"})
_BLOCK_LIKE_DEFAULT_EXPORTS = frozenset({"class", "function", "function_expression", "generator_function"})


def _needs_semicolon(node: Node) -> bool:
    if node.type != "export_statement":
        return True
    if node.child_by_field_name("declaration") is not None:
        return False
    value = node.child_by_field_name("value")
    return value is None or value.type not in _BLOCK_LIKE_DEFAULT_EXPORTS


def _last_code_child(node: Node) -> Node | None:
    for child in reversed(node.children):
        if child.type != "comment":
            return child
    return None


@rule(RULE_ID, "Terminate statements with a semicolon.")
def check_semicolons(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    for node in model.statements:
        if node.has_error:
            continue
        if node.parent is not None and node.parent.type in _LOOP_HEADERS:
            continue
        if not _needs_semicolon(node):
            continue
        last = _last_code_child(node)
        if last is not None and last.type == ";":
            continue
        end = last if last is not None else node
        yield Violation.at(RULE_ID, model.end_position(end), "Missing semicolon.")
