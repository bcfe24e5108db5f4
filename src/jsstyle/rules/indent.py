"""Indentation checks.

Expected indentation is relative: a line that starts a statement (or class
member, case clause or comment) inside a block sits one indent unit deeper
than the line where the construct owning the block begins. That keeps
callbacks, object-literal methods and chained calls correct without a full
layout model. Continuation lines are only checked for the indent character.
"""

from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import IndentOptions, LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel, node_key
from jsstyle.models import Position, Violation

RULE_ID = "indent"

_UNANCHORED_PARENTS = frozenset({"program", "statement_block", "switch_case", "switch_default", "class_body"})
_CASE_TYPES = frozenset({"switch_case", "switch_default"})


def _describe(indent: str, options: IndentOptions) -> str:
    count = len(indent)
    if options.style == "tab":
        return f"{count} tab{'s' if count != 1 else ''}"
    return f"{count} space{'s' if count != 1 else ''}"


def _anchor_row(block: Node) -> int:
    owner = block.parent
    if owner is None or owner.type in _UNANCHORED_PARENTS:
        return block.start_point[0]
    return owner.start_point[0]


def _case_body(case: Node) -> list[Node]:
    value = case.child_by_field_name("value")
    skip = node_key(value) if value is not None else None
    return [child for child in case.named_children if node_key(child) != skip]


def _expectations(model: SyntacticModel, unit: str) -> Iterator[tuple[int, str]]:
    """Yield ``(row, expected_indentation)`` for every line-starting construct."""
    for child in model.root.named_children:
        if model.starts_line(child):
            yield child.start_point[0], ""

    for block in model.blocks:
        if block.child_count < 2 or block.children[-1].type != "}":
            continue
        base = model.indentation(_anchor_row(block))
        inner = base + unit
        for child in block.named_children:
            if model.starts_line(child):
                yield child.start_point[0], inner
            if child.type in _CASE_TYPES:
                case_inner = model.indentation(child.start_point[0]) + unit
                for statement in _case_body(child):
                    if model.starts_line(statement):
                        yield statement.start_point[0], case_inner
        closing = block.children[-1]
        if closing.start_point[0] != block.start_point[0] and model.starts_line(closing):
            yield closing.start_point[0], base


def _wrong_character_rows(model: SyntacticModel, options: IndentOptions) -> Iterator[tuple[int, int]]:
    wrong = "\t" if options.style == "space" else " "
    for row, line in enumerate(model.lines):
        if row in model.opaque_rows or not line.strip():
            continue
        indent = model.indentation(row)
        if wrong in indent:
            yield row, indent.index(wrong)


@rule(RULE_ID, "Indent blocks consistently with the configured unit.")
def check_indent(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    options = config.indent
    bad_rows: set[int] = set()
    for row, column in _wrong_character_rows(model, options):
        bad_rows.add(row)
        name = "tab" if options.style == "space" else "space"
        yield Violation.at(RULE_ID, Position(row=row, column=column), f"Unexpected {name} character in indentation.")

    reported: set[int] = set()
    for row, expected in _expectations(model, options.unit):
        if row in bad_rows or row in reported or row in model.opaque_rows:
            continue
        actual = model.indentation(row)
        if actual != expected:
            reported.add(row)
            yield Violation.at(
                RULE_ID,
                Position(row=row, column=len(actual)),
                f"Expected indentation of {_describe(expected, options)} but found {_describe(actual, options)}.",
            )
