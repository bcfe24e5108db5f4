import re
from collections.abc import Iterator

from tree_sitter import Node

from jsstyle.config import LintConfig, NamingOptions
from jsstyle.core.registry import rule
from jsstyle.core.scanner import Declaration, SyntacticModel
from jsstyle.models import Violation

RULE_ID = "naming"

CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
CONSTANT_CASE = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*$")

# Initializers that make a PascalCase variable name legitimate.
_CONSTRUCTOR_VALUES = frozenset({"class", "function", "function_expression"})


def _strip_affixes(name: str, options: NamingOptions) -> str:
    prefixes = ("_" if options.allow_leading_underscore else "") + ("$" if options.allow_leading_dollar else "")
    return name.lstrip(prefixes) if prefixes else name


def _declarator(node: Node) -> Node | None:
    parent = node.parent
    return parent if parent is not None and parent.type == "variable_declarator" else None


def _is_const(declarator: Node) -> bool:
    declaration = declarator.parent
    if declaration is None or declaration.type != "lexical_declaration" or declaration.child_count == 0:
        return False
    return declaration.children[0].type == "const"


def _is_require_call(model: SyntacticModel, value: Node) -> bool:
    if value.type != "call_expression":
        return False
    callee = value.child_by_field_name("function")
    return callee is not None and model.text(callee) == "require"


def _variable_styles(model: SyntacticModel, node: Node, options: NamingOptions) -> tuple[str, list[re.Pattern[str]]]:
    allowed = {"camelCase": CAMEL_CASE}
    declarator = _declarator(node)
    if declarator is not None:
        if options.constant_case and _is_const(declarator):
            allowed["UPPER_SNAKE_CASE"] = CONSTANT_CASE
        value = declarator.child_by_field_name("value")
        if value is not None and (value.type in _CONSTRUCTOR_VALUES or _is_require_call(model, value)):
            allowed["PascalCase"] = PASCAL_CASE
    return " or ".join(allowed), list(allowed.values())


def _expected_styles(
    model: SyntacticModel, declaration: Declaration, options: NamingOptions
) -> tuple[str, list[re.Pattern[str]]]:
    if declaration.kind == "class":
        return "PascalCase", [PASCAL_CASE]
    if declaration.kind == "function":
        return "camelCase or PascalCase", [CAMEL_CASE, PASCAL_CASE]
    if declaration.kind == "variable":
        return _variable_styles(model, declaration.node, options)
    return "camelCase", [CAMEL_CASE]


_LABELS = {
    "class": "Class name",
    "function": "Function name",
    "method": "Method name",
    "parameter": "Parameter",
    "variable": "Identifier",
}


@rule(RULE_ID, "Use camelCase for variables and functions, PascalCase for classes and constructors.")
def check_naming(model: SyntacticModel, config: LintConfig) -> Iterator[Violation]:
    options = config.naming
    for declaration in model.declarations:
        bare = _strip_affixes(declaration.name, options)
        if not bare:
            continue
        expected, styles = _expected_styles(model, declaration, options)
        if any(style.match(bare) for style in styles):
            continue
        label = _LABELS.get(declaration.kind, "Identifier")
        yield Violation.at(
            RULE_ID, model.position(declaration.node), f"{label} '{declaration.name}' is not in {expected}."
        )
