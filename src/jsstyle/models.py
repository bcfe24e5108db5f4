from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class Position(BaseModel):
    row: int
    column: int


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    line: int
    column: int
    message: str
    severity: Severity = Severity.ERROR
    path: str = "<string>"

    @classmethod
    def at(cls, rule_id: str, position: Position, message: str) -> "Violation":
        """Build a violation from a zero-based tree-sitter position."""
        return cls(rule_id=rule_id, line=position.row + 1, column=position.column + 1, message=message)


class RuleInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    description: str
    default_severity: Severity


class FileReport(BaseModel):
    path: str
    language: str
    violations: list[Violation] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity is Severity.ERROR)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity is Severity.WARNING)


class LintReport(BaseModel):
    files: list[FileReport] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return sum(f.error_count for f in self.files)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_count(self) -> int:
        return sum(f.warning_count for f in self.files)

    @property
    def violations(self) -> list[Violation]:
        return [v for f in self.files for v in f.violations]
