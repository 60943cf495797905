"""Domain exceptions for binding and CLI diagnostics."""

from __future__ import annotations


class IniBindError(RuntimeError):
    """Base class for every terminal error raised while binding a file."""

    def __init__(
        self,
        *,
        detail: str,
        line: int | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize a bind error with an optional 1-based line number."""

        super().__init__(detail if line is None else f"line {line}: {detail}")
        self.detail = detail
        self.line = line
        self.hint = hint


class UsageError(IniBindError):
    """Raised when the bind target is not a mutable dataclass instance."""


class FileAccessError(IniBindError):
    """Raised when the configuration file cannot be opened or read."""


class IniSyntaxError(IniBindError):
    """Raised for a malformed section header or assignment line."""


class ValueTypeError(IniBindError):
    """Raised when a value cannot be coerced into its field's declared type."""


class UnsupportedFieldKindError(IniBindError):
    """Raised when a key resolves to a field whose type cannot be coerced."""
