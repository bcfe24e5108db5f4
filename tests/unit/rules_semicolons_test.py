"""Unit tests for the semicolon rule."""

from collections.abc import Callable

from jsstyle.models import Violation

RunRule = Callable[..., list[Violation]]


def test_missing_semicolon(run_rule: RunRule) -> None:
    violations = run_rule("semi", "const a = 1\n")
    assert [(v.line, v.message) for v in violations] == [(1, "Missing semicolon.")]
    assert violations[0].column == 12


def test_terminated_statements_pass(run_rule: RunRule) -> None:
    source = "const a = 1;\nfoo(a);\nfunction f() {\n  return a;\n}\n"
    assert run_rule("semi", source) == []


def test_return_without_semicolon(run_rule: RunRule) -> None:
    violations = run_rule("semi", "function f() {\n  return 1\n}\n")
    assert [v.line for v in violations] == [2]


def test_loop_headers_are_skipped(run_rule: RunRule) -> None:
    source = "for (let i = 0; i < 3; i++) {\n  foo(i);\n}\nfor (const x of xs) {\n  foo(x);\n}\n"
    assert run_rule("semi", source) == []


def test_do_while(run_rule: RunRule) -> None:
    violations = run_rule("semi", "do {\n  x();\n} while (y)\n")
    assert [v.line for v in violations] == [3]


def test_exports_and_imports(run_rule: RunRule) -> None:
    source = "import x from 'y'\nexport function foo() {}\nexport { x }\n"
    violations = run_rule("semi", source)
    assert [v.line for v in violations] == [1, 3]


def test_block_statements_need_no_semicolon(run_rule: RunRule) -> None:
    assert run_rule("semi", "if (a) {\n  b();\n}\nclass A {}\n") == []
