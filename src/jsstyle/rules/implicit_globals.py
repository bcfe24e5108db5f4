from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel, pattern_names
from jsstyle.models import Violation

RULE_ID = "no-globals"

_TOP_LEVEL_FUNCTIONS = frozenset({"function_declaration", "generator_function_declaration"})


def _declares_loop_variable(target: Node) -> bool:
    parent = target.parent
    return parent is not None and parent.type == "for_in_statement" and parent.child_by_field_name("kind") is not None


def _implicit_globals(model: SyntacticModel, known: set[str]) -> Iterator[Violation]:
    for target in model.assignment_targets:
        if _declares_loop_variable(target):
            continue
        for name_node in pattern_names(target):
            name = model.text(name_node)
            if name in known or model.is_declared(name, name_node):
                continue
            yield Violation.at(
                RULE_ID,
                model.position(name_node),
                f"Assignment to undeclared variable '{name}' creates an implicit global.",
            )


def _top_level_names(root: Node) -> Iterator[Node]:
    for child in root.named_children:
        if child.type == "variable_declaration":
            for declarator in child.named_children:
                name = declarator.child_by_field_name("name") if declarator.type == "variable_declarator" else None
                if name is not None:
                    yield from pattern_names(name)
        elif child.type in _TOP_LEVEL_FUNCTIONS:
            name = child.child_by_field_name("name")
            if name is not None:
                yield name


@rule(RULE_ID, "Avoid creating global variables; keep state inside modules or closures.")
def check_globals(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    options = config.no_globals
    known = set(options.known_globals)
    yield from _implicit_globals(model, known)
    if not options.top_level or model.is_module:
        return
    for name_node in _top_level_names(model.root):
        name = model.text(name_node)
        if name in known:
            continue
        yield Violation.at(
            RULE_ID, model.position(name_node), f"Top-level declaration '{name}' creates a global variable."
        )
