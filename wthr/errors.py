from typing import Any, Optional


class WthrError(Exception):
    """Base exception for every failure raised while running a wthr script."""
    kind = 'WthrError'

    def __init__(self, message: str, line: Optional[int] = None, filename: Optional[str] = None):
        super().__init__(f"{self.kind}: {message}")
        self.message = message
        self.line = line
        self.filename = filename

    def diagnostic(self) -> str:
        prefix = ''
        if self.filename:
            prefix += f"{self.filename}:"
        if self.line:
            prefix += f"{self.line}:"
        if prefix:
            prefix += ' '
        return f"{prefix}{self.kind}: {self.message}"


class LexError(WthrError):
    kind = 'LexError'


class ParseError(WthrError):
    """Raised when the parser meets a token it did not expect."""
    kind = 'ParseError'

    def __init__(self, message: str, line: Optional[int] = None, expected: Any = None, found: Any = None):
        super().__init__(message, line)
        self.expected = expected
        self.found = found


class EvalError(WthrError):
    kind = 'EvalError'


class ModuleImportError(WthrError):
    kind = 'ImportError'
