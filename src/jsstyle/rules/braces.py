"""Brace placement: one true brace style (1TBS) or Allman."""

from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import LintConfig
from jsstyle.core.registry import rule
from jsstyle.core.scanner import SyntacticModel, Token
from jsstyle.models import Position, Violation

RULE_ID = "brace-style"

# A bare `{ ... }` statement has no controlling statement to attach to.
_STANDALONE_PARENTS = frozenset({"program", "statement_block", "switch_case", "switch_default"})
_CONTINUATION_KEYWORDS = frozenset({"else", "catch", "finally"})


def _token_position(token: Token) -> Position:
    return Position(row=token.start_row, column=token.start_column)


def _braces(block: Node) -> tuple[Node, Node] | None:
    if block.child_count < 2:
        return None
    opening, closing = block.children[0], block.children[-1]
    if opening.type != "{" or closing.type != "}" or closing.is_missing:
        return None
    return opening, closing


def _check_block(model: SyntacticModel, block: Node, style: str, allow_single_line: bool) -> Iterator[Violation]:
    braces = _braces(block)
    if braces is None:
        return
    opening, closing = braces
    single_line = opening.start_point[0] == closing.start_point[0]
    standalone = block.parent is None or block.parent.type in _STANDALONE_PARENTS

    if single_line:
        if not allow_single_line and block.named_child_count > 0:
            yield Violation.at(
                RULE_ID, model.position(opening), "Statement inside of curly braces should be on next line."
            )
        return

    if not standalone:
        previous = model.previous_token(opening)
        if style == "1tbs" and previous is not None and previous.end_row != opening.start_point[0]:
            yield Violation.at(
                RULE_ID,
                model.position(opening),
                "Opening curly brace does not appear on the same line as controlling statement.",
            )
        elif style == "allman" and not model.starts_line(opening):
            yield Violation.at(
                RULE_ID,
                model.position(opening),
                "Opening curly brace appears on the same line as controlling statement.",
            )

    following = model.next_token(opening)
    if following is not None and following.start_row == opening.start_point[0] and following.kind != "comment":
        yield Violation.at(
            RULE_ID, _token_position(following), "Statement inside of curly braces should be on next line."
        )

    if not model.starts_line(closing):
        yield Violation.at(RULE_ID, model.position(closing), "Closing curly brace should be on its own line.")


def _check_continuations(model: SyntacticModel, style: str) -> Iterator[Violation]:
    for index, token in enumerate(model.tokens):
        if token.kind not in _CONTINUATION_KEYWORDS or index == 0:
            continue
        previous = model.tokens[index - 1]
        if previous.kind != "}":
            continue
        same_line = previous.end_row == token.start_row
        if style == "1tbs" and not same_line:
            yield Violation.at(
                RULE_ID,
                _token_position(token),
                "Closing curly brace does not appear on the same line as the subsequent block.",
            )
        elif style == "allman" and same_line:
            yield Violation.at(
                RULE_ID,
                _token_position(token),
                "Closing curly brace appears on the same line as the subsequent block.",
            )


@rule(RULE_ID, "Place braces according to the configured brace style.")
def check_brace_style(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    options = config.brace_style
    for block in model.blocks:
        yield from _check_block(model, block, options.style, options.allow_single_line)
    yield from _check_continuations(model, options.style)
