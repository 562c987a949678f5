from typing import List, Optional


class StrataError(ValueError):
    """Base class for every error raised while compiling strata templates."""


class TemplateSyntaxError(StrataError):
    """Raises a fatal parse error tied to a source line."""

    def __init__(self, message: str, lineno: int, path: Optional[str] = None):
        self.message = message
        self.lineno = lineno
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        location = f"{self.path}, line {self.lineno}" if self.path else f"line {self.lineno}"
        return f"Strata Parse Error ({location}): {self.message}"


class TokenCountError(TemplateSyntaxError):
    """An `extends` or `block` line does not split into exactly two tokens."""

    def __init__(self, expected: int, actual: int, lineno: int, path: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The line tokens length is invalid. (expected: {expected}, actual: {actual}, line no: {lineno})",
            lineno, path)


class IndentError(TemplateSyntaxError):
    pass


class ChildNotAllowedError(TemplateSyntaxError):
    pass


class InvalidElementError(TemplateSyntaxError):
    pass


class ExtendsCycleError(StrataError):
    """Circular dependency in an extends chain."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Circular extends dependency: {' -> '.join(cycle)}")


class RenderError(StrataError):
    pass


class ConfigError(StrataError):
    pass
