"""Exception hierarchy shared by the library, the CLI and the servers."""


class JsStyleError(Exception):
    """Base class for every error jsstyle raises on purpose."""


class ConfigError(JsStyleError):
    pass


class SourceReadError(JsStyleError):
    pass


class UnsupportedLanguageError(JsStyleError, ValueError):
    pass


class UnknownRuleError(JsStyleError, KeyError):
    def __init__(self, rule_id: str) -> None:
        super().__init__(rule_id)
        self.rule_id = rule_id

    def __str__(self) -> str:
        return f"Unknown rule '{self.rule_id}'"


class DuplicateRuleError(JsStyleError):
    pass


class RuleExecutionError(JsStyleError):
    def __init__(self, rule_id: str, path: str) -> None:
        super().__init__(f"Rule '{rule_id}' failed on {path}")
        self.rule_id = rule_id
        self.path = path


class UnknownFormatError(JsStyleError, ValueError):
    pass
