"""Source scanner: turns JavaScript text into a read-only syntactic model.

The model bundles the tree-sitter tree with the views the style rules need:
a flat token stream, node lists grouped by the capture names in
``queries/javascript_model.scm``, rows that belong to multi-line literals or
comments, and an index of the names each scope declares.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from jsstyle.core.languages import normalize_language, resolve_language
from jsstyle.errors import SourceReadError
from jsstyle.models import Position

logger = logging.getLogger(__name__)

NodeKey = tuple[int, int, str]

FUNCTION_SCOPES = frozenset(
    {
        "arrow_function",
        "function",
        "function_declaration",
        "function_expression",
        "generator_function",
        "generator_function_declaration",
        "method_definition",
    }
)
BLOCK_SCOPES = frozenset({"catch_clause", "for_in_statement", "for_statement", "statement_block", "switch_body"})
_PROGRAM = "program"
_OPAQUE_TYPES = frozenset({"comment", "string", "template_string"})


def node_key(node: Node) -> NodeKey:
    return (node.start_byte, node.end_byte, node.type)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start_row: int
    start_column: int
    end_row: int
    end_column: int
    start_byte: int
    end_byte: int


@dataclass(frozen=True)
class Declaration:
    """A named binding picked up by the declaration captures."""

    kind: str
    node: Node
    name: str


@dataclass(frozen=True)
class ScopeIndex:
    scopes: dict[NodeKey, frozenset[str]] = field(default_factory=dict)

    def declares(self, scope: Node, name: str) -> bool:
        return name in self.scopes.get(node_key(scope), frozenset())

    def is_declared(self, name: str, node: Node) -> bool:
        current: Node | None = node
        while current is not None:
            if self.declares(current, name):
                return True
            current = current.parent
        return False


@dataclass(frozen=True)
class SyntacticModel:
    path: str
    language: str
    source: str
    source_bytes: bytes
    lines: tuple[str, ...]
    tree: Tree
    tokens: tuple[Token, ...]
    statements: tuple[Node, ...]
    blocks: tuple[Node, ...]
    strings: tuple[Node, ...]
    binaries: tuple[Node, ...]
    comments: tuple[Node, ...]
    declarations: tuple[Declaration, ...]
    assignment_targets: tuple[Node, ...]
    error_nodes: tuple[Node, ...]
    opaque_rows: frozenset[int]
    scopes: ScopeIndex
    is_module: bool
    _token_index: dict[int, int] = field(default_factory=dict, repr=False)
    _first_on_row: dict[int, Token] = field(default_factory=dict, repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def position(self, node: Node) -> Position:
        row, byte_column = node.start_point
        return Position(row=row, column=self._char_column(row, byte_column))

    def end_position(self, node: Node) -> Position:
        row, byte_column = node.end_point
        return Position(row=row, column=self._char_column(row, byte_column))

    def _char_column(self, row: int, byte_column: int) -> int:
        if row >= len(self.lines):
            return byte_column
        line_bytes = self.lines[row].encode("utf-8")
        return len(line_bytes[:byte_column].decode("utf-8", errors="replace"))

    def token_at(self, node: Node) -> Token | None:
        """Return the token that starts where ``node`` starts."""
        index = self._token_index.get(node.start_byte)
        return self.tokens[index] if index is not None else None

    def previous_token(self, node: Node) -> Token | None:
        index = self._token_index.get(node.start_byte)
        if index is None or index == 0:
            return None
        return self.tokens[index - 1]

    def next_token(self, node: Node) -> Token | None:
        index = self._token_index.get(node.start_byte)
        if index is None or index + 1 >= len(self.tokens):
            return None
        return self.tokens[index + 1]

    def first_token_on_row(self, row: int) -> Token | None:
        return self._first_on_row.get(row)

    def starts_line(self, node: Node) -> bool:
        token = self.first_token_on_row(node.start_point[0])
        return token is not None and token.start_byte == node.start_byte

    def indentation(self, row: int) -> str:
        line = self.lines[row]
        return line[: len(line) - len(line.lstrip(" \t"))]

    def is_declared(self, name: str, node: Node) -> bool:
        return self.scopes.is_declared(name, node)


@lru_cache(maxsize=8)
def _load_query(language: str, query_type: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{language}_{query_type}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


def _capture(tree: Tree, language: str) -> dict[str, list[Node]]:
    cursor = QueryCursor(_load_query(language, "model"))
    captured: dict[str, list[Node]] = {}
    seen: set[tuple[str, NodeKey]] = set()
    for _, matched_captures in cursor.matches(tree.root_node):
        for cap_name, nodes in matched_captures.items():
            for node in nodes:
                marker = (cap_name, node_key(node))
                if marker in seen:
                    continue
                seen.add(marker)
                captured.setdefault(cap_name, []).append(node)
    for nodes in captured.values():
        nodes.sort(key=lambda n: (n.start_byte, -n.end_byte))
    return captured


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def pattern_names(node: Node) -> list[Node]:
    """Return the identifier nodes bound by a declaration pattern."""
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [node]
    if node.type in ("member_expression", "subscript_expression"):
        return []
    if node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        return pattern_names(value) if value is not None else []
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        return pattern_names(left) if left is not None else []
    names: list[Node] = []
    for child in node.named_children:
        names.extend(pattern_names(child))
    return names


def _enclosing(node: Node, types: Iterable[str]) -> Node:
    wanted = set(types) | {_PROGRAM}
    current = node.parent
    while current is not None and current.type not in wanted:
        current = current.parent
    return current if current is not None else node


def _build_scopes(root: Node, source_bytes: bytes) -> ScopeIndex:
    scopes: dict[NodeKey, set[str]] = {}

    def bind(scope: Node, identifiers: Iterable[Node]) -> None:
        names = scopes.setdefault(node_key(scope), set())
        for ident in identifiers:
            names.add(source_bytes[ident.start_byte : ident.end_byte].decode("utf-8", errors="replace"))

    function_or_program = FUNCTION_SCOPES
    block_or_function = BLOCK_SCOPES | FUNCTION_SCOPES

    for node in _walk(root):
        kind = node.type
        if kind == "variable_declaration":
            target = _enclosing(node, function_or_program)
            for declarator in node.named_children:
                name = declarator.child_by_field_name("name") if declarator.type == "variable_declarator" else None
                if name is not None:
                    bind(target, pattern_names(name))
        elif kind == "lexical_declaration":
            target = _enclosing(node, block_or_function)
            for declarator in node.named_children:
                name = declarator.child_by_field_name("name") if declarator.type == "variable_declarator" else None
                if name is not None:
                    bind(target, pattern_names(name))
        elif kind in ("function_declaration", "generator_function_declaration"):
            name = node.child_by_field_name("name")
            if name is not None:
                bind(_enclosing(node, function_or_program), [name])
        elif kind in ("function", "function_expression", "generator_function", "class"):
            name = node.child_by_field_name("name")
            if name is not None:
                bind(node, [name])
        elif kind == "class_declaration":
            name = node.child_by_field_name("name")
            if name is not None:
                bind(_enclosing(node, block_or_function), [name])
        elif kind == "formal_parameters":
            owner = node.parent if node.parent is not None else node
            bind(owner, [ident for param in node.named_children for ident in pattern_names(param)])
        elif kind == "arrow_function":
            param = node.child_by_field_name("parameter")
            if param is not None:
                bind(node, pattern_names(param))
        elif kind == "catch_clause":
            param = node.child_by_field_name("parameter")
            if param is not None:
                bind(node, pattern_names(param))
        elif kind == "for_in_statement":
            declaration_kind = node.child_by_field_name("kind")
            left = node.child_by_field_name("left")
            if declaration_kind is not None and left is not None:
                keyword = source_bytes[declaration_kind.start_byte : declaration_kind.end_byte]
                target = _enclosing(node, function_or_program) if keyword == b"var" else node
                bind(target, pattern_names(left))
        elif kind == "import_clause":
            bind(root, [n for n in _walk(node) if n.type == "identifier"])

    return ScopeIndex({key: frozenset(names) for key, names in scopes.items()})


def _opaque_rows(node: Node) -> range:
    return range(node.start_point[0] + 1, node.end_point[0] + 1)


def scan_source(source: str, path: str = "<string>", language: str = "javascript") -> SyntacticModel:
    language = normalize_language(language)
    source_bytes = source.encode("utf-8")
    lines = tuple(source.split("\n"))
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)
    root = tree.root_node

    def char_column(row: int, byte_column: int) -> int:
        if row >= len(lines):
            return byte_column
        return len(lines[row].encode("utf-8")[:byte_column].decode("utf-8", errors="replace"))

    tokens: list[Token] = []
    errors: list[Node] = []
    opaque: set[int] = set()
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        if node.type in _OPAQUE_TYPES and node.end_point[0] > node.start_point[0]:
            opaque.update(_opaque_rows(node))
        if node.child_count == 0 and node.end_byte > node.start_byte:
            start_row, start_byte_col = node.start_point
            end_row, end_byte_col = node.end_point
            tokens.append(
                Token(
                    kind=node.type,
                    text=source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
                    start_row=start_row,
                    start_column=char_column(start_row, start_byte_col),
                    end_row=end_row,
                    end_column=char_column(end_row, end_byte_col),
                    start_byte=node.start_byte,
                    end_byte=node.end_byte,
                )
            )
    tokens.sort(key=lambda t: t.start_byte)

    token_index: dict[int, int] = {}
    first_on_row: dict[int, Token] = {}
    for index, token in enumerate(tokens):
        token_index.setdefault(token.start_byte, index)
        first_on_row.setdefault(token.start_row, token)

    if errors:
        logger.debug("%s: %d syntax error node(s)", path, len(errors))

    captured = _capture(tree, language)
    declarations = tuple(
        Declaration(
            kind=cap_name.removeprefix("declare."),
            node=node,
            name=source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
        )
        for cap_name, nodes in captured.items()
        if cap_name.startswith("declare.")
        for node in nodes
    )
    is_module = any(child.type in ("import_statement", "export_statement") for child in root.named_children)

    return SyntacticModel(
        path=path,
        language=language,
        source=source,
        source_bytes=source_bytes,
        lines=lines,
        tree=tree,
        tokens=tuple(tokens),
        statements=tuple(captured.get("statement", [])),
        blocks=tuple(captured.get("block", [])),
        strings=tuple(captured.get("string", [])),
        binaries=tuple(captured.get("binary", [])),
        comments=tuple(captured.get("comment", [])),
        declarations=tuple(sorted(declarations, key=lambda d: d.node.start_byte)),
        assignment_targets=tuple(captured.get("assign.target", [])),
        error_nodes=tuple(errors),
        opaque_rows=frozenset(opaque),
        scopes=_build_scopes(root, source_bytes),
        is_module=is_module,
        _token_index=token_index,
        _first_on_row=first_on_row,
    )


def scan_file(path: str | Path, language: str | None = None) -> SyntacticModel:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)
    try:
        source = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceReadError(f"File not found: {path}") from None
    except UnicodeDecodeError as exc:
        raise SourceReadError(f"Cannot decode {path} as UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise SourceReadError(f"Cannot read {path}: {exc.strerror}") from exc
    return scan_source(source, str(file_path), resolved_language)
