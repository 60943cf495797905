"""Binding orchestration for section/key-value configuration files.

Responsibilities:
- Drive lines through classification, schema resolution, and coercion.
- Track the active section (none until a declared `[section]` header).
- Fail fast on the first malformed line; earlier assignments stay applied.

Key public entry points:
- `IniBinder`: configurable binder returning a `BindReport`.
- `load_ini`, `load_ini_bytes`: convenience functions returning the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from .coercion import FieldKind, apply_value
from .config import UNSUPPORTED_KINDS_IGNORE, BindConfig
from .errors import FileAccessError, IniBindError, UsageError
from .lines import Assignment, SectionHeader, classify_line, decode_line, split_lines
from .schema import ensure_target, resolve_key, resolve_section
from .telemetry.logger import BindLogger

T = TypeVar("T")

_BYTES_SOURCE_LABEL = "<bytes>"


@dataclass(slots=True)
class BindReport:
    """Counters describing one completed bind.

    Attributes:
        sections: Section headers seen, declared or not.
        applied: Assignments written into the target.
        skipped: Assignments ignored (no active section, unknown key, or
            ignored unsupported field).
    """

    sections: int = 0
    applied: int = 0
    skipped: int = 0


@dataclass(slots=True)
class _ParseCursor:
    """Transient state of one bind: the active section value, if any."""

    target: object
    section: object | None = None


class IniBinder:
    """Bind section/key-value content into a mutable dataclass instance."""

    def __init__(
        self,
        config: BindConfig | None = None,
        logger: BindLogger | None = None,
    ) -> None:
        """Initialize binder settings and event logger."""

        self._config = config or BindConfig()
        try:
            self._config.validate()
        except ValueError as exc:
            raise UsageError(detail=f"invalid bind config: {exc}") from exc
        self._logger = logger or BindLogger()

    def bind_file(self, path: str | Path, target: object) -> BindReport:
        """Read `path` once and bind its content into `target`.

        Raises:
            UsageError: Before any file access, when `target` is not bindable.
            FileAccessError: When the file cannot be read.
        """

        ensure_target(target)
        source = str(path)
        try:
            content = Path(path).read_bytes()
        except OSError as exc:
            self._logger.log_load_failure(source, "FileAccessError", None)
            raise FileAccessError(
                detail=f"cannot read config file `{source}`: {exc.strerror or exc}",
                hint="Verify the path exists and is readable.",
            ) from exc
        return self._bind(content, target, source)

    def bind_bytes(self, content: bytes, target: object) -> BindReport:
        """Bind already-read file content into `target`."""

        ensure_target(target)
        return self._bind(content, target, _BYTES_SOURCE_LABEL)

    def _bind(self, content: bytes, target: object, source: str) -> BindReport:
        """Run the line-by-line bind and log its outcome."""

        self._logger.log_load_start(source)
        report = BindReport()
        cursor = _ParseCursor(target=target)
        try:
            for index, raw_line in enumerate(split_lines(content, self._config.line_endings)):
                self._bind_line(raw_line, index + 1, cursor, report)
        except IniBindError as exc:
            self._logger.log_load_failure(source, type(exc).__name__, exc.line)
            raise
        self._logger.log_load_complete(source, report.applied, report.skipped)
        return report

    def _bind_line(
        self,
        raw_line: bytes,
        line_number: int,
        cursor: _ParseCursor,
        report: BindReport,
    ) -> None:
        """Classify one line and apply its effect to the target or the cursor."""

        entry = classify_line(decode_line(raw_line, line_number), line_number)
        if entry is None:
            return
        if isinstance(entry, SectionHeader):
            report.sections += 1
            cursor.section = resolve_section(
                cursor.target, entry.name, self._config.tag, line=line_number
            )
            if cursor.section is None:
                self._logger.log_section_skipped(entry.name, line_number)
            return
        self._apply_assignment(entry, cursor, report)

    def _apply_assignment(
        self, entry: Assignment, cursor: _ParseCursor, report: BindReport
    ) -> None:
        """Resolve the key in the active section and write the coerced value."""

        if cursor.section is None:
            report.skipped += 1
            self._logger.log_key_skipped(entry.key, entry.line_number, "no_active_section")
            return

        leaf = resolve_key(cursor.section, entry.key, self._config.tag)
        if leaf is None:
            report.skipped += 1
            self._logger.log_key_skipped(entry.key, entry.line_number, "unknown_key")
            return

        if (
            leaf.kind is FieldKind.UNSUPPORTED
            and self._config.unsupported_kinds == UNSUPPORTED_KINDS_IGNORE
        ):
            report.skipped += 1
            self._logger.log_key_skipped(entry.key, entry.line_number, "unsupported_kind")
            return

        apply_value(cursor.section, leaf, entry.value, entry.line_number)
        report.applied += 1


def load_ini(path: str | Path, target: T, config: BindConfig | None = None) -> T:
    """Bind the file at `path` into `target` in place and return `target`."""

    IniBinder(config=config).bind_file(path, target)
    return target


def load_ini_bytes(content: bytes, target: T, config: BindConfig | None = None) -> T:
    """Bind raw file content into `target` in place and return `target`."""

    IniBinder(config=config).bind_bytes(content, target)
    return target
